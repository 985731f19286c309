# This project was developed with assistance from AI tools.
"""Onboarding wizard controller.

``KycFlow`` exclusively owns the applicant session and every per-step draft.
State changes only through the methods below; forward transitions call the
gateway and move on only when the backend accepts the submission. A failed
call leaves the wizard on the same step with the backend's message in that
step's error slot, so the applicant can edit and retry.
"""

import dataclasses
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date
from typing import Any, TypeVar

from ..client.gateway import KycGateway, KycRequestError
from ..schemas.documents import (
    AddressMeta,
    AddressResult,
    IdDocumentDraft,
    SelfieDraft,
    SelfieResult,
    UploadedFile,
    empty_id_documents,
)
from ..schemas.identity import IdentityForm
from ..services.id_doc_types import id_documents_error
from ..services.identity_validation import IdentityFieldErrors, format_full_name, validate_identity
from .camera import CameraSession, CaptureError, MediaDeviceInfo, detect_camera
from .gating import address_ready, id_documents_ready, identity_ready, selfie_ready
from .steps import LOADING_MESSAGES, StepId

logger = logging.getLogger(__name__)

T = TypeVar("T")

GENERIC_ERROR_MESSAGE = "Unexpected error occurred."
IDENTITY_INCOMPLETE_MESSAGE = "Please complete the required identity fields."
NOT_REGISTERED_MESSAGE = "Register the applicant first."
SELFIE_MISSING_MESSAGE = "Provide a selfie or upload both sides of your ID/passport."
ADDRESS_INCOMPLETE_MESSAGE = "Upload a document and complete the form."
EMPTY_VALUE = "—"


class InvalidTransitionError(Exception):
    """Raised when a move is not allowed from the current step."""


@dataclass
class ApplicantSession:
    applicant_id: str | None = None
    current_step: StepId = StepId.IDENTITY


class KycFlow:
    """Linear identity -> selfie -> id-docs -> address -> success wizard.

    Args:
        gateway: Client used for every forward transition.
        today: Fixed reference day for date-of-birth validation (tests).
    """

    def __init__(self, gateway: KycGateway, *, today: date | None = None):
        self._gateway = gateway
        self._today = today
        # Bumped on restart; results of calls started earlier are dropped
        self._generation = 0
        self._reset()

    def _reset(self) -> None:
        self.session = ApplicantSession()
        self.identity = IdentityForm()
        self.selfie = SelfieDraft()
        self.id_documents: list[IdDocumentDraft] = empty_id_documents()
        self.address_document: UploadedFile | None = None
        self.address_meta = AddressMeta()
        self.selfie_result: SelfieResult | None = None
        self.address_result: AddressResult | None = None
        self._errors: dict[StepId, str | None] = {step: None for step in StepId.ordered()}
        self.camera_message: str | None = None
        self.camera_error: str | None = None
        self.is_loading = False
        self.loading_message = "Processing..."
        self.confirm_open = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def current_step(self) -> StepId:
        return self.session.current_step

    @property
    def applicant_id(self) -> str | None:
        return self.session.applicant_id

    @property
    def identity_field_errors(self) -> IdentityFieldErrors:
        return validate_identity(self.identity, today=self._today)

    def error_for(self, step: StepId) -> str | None:
        return self._errors.get(step)

    @property
    def current_error(self) -> str | None:
        return self._errors.get(self.current_step)

    @property
    def can_advance(self) -> bool:
        """Gating predicate of the current step."""
        step = self.current_step
        if step is StepId.IDENTITY:
            return identity_ready(self.identity, today=self._today)
        if step is StepId.SELFIE:
            return selfie_ready(self.selfie)
        if step is StepId.ID_DOCS:
            return id_documents_ready(self.id_documents)
        if step is StepId.ADDRESS:
            return address_ready(self.address_document, self.address_meta)
        return False

    @property
    def next_disabled(self) -> bool:
        return self.is_loading or not self.can_advance

    @property
    def back_disabled(self) -> bool:
        return self.is_loading or self.current_step.previous_step() is None

    @property
    def next_label(self) -> str:
        return "Submit" if self.current_step is StepId.ADDRESS else "Next"

    @property
    def parsed_address(self) -> dict[str, str] | None:
        """Parsed address merged with its issuer, for the success view."""
        if self.address_result is None:
            return None
        return {
            **self.address_result.parsed_address.model_dump(),
            "issuer": self.address_result.issuer,
        }

    def confirmation_summary(self) -> list[tuple[str, str]]:
        """Rows shown in the review dialog before the address submission."""
        rows = [
            ("Email", self.identity.email),
            ("Phone", self.identity.phone),
            ("Name", format_full_name(self.identity)),
            ("Document type", self.address_meta.doc_type),
            ("Issuer", self.address_meta.issuer),
        ]
        return [(label, value.strip() or EMPTY_VALUE) for label, value in rows]

    # ------------------------------------------------------------------
    # Draft edits
    # ------------------------------------------------------------------

    def update_identity(self, **fields: str) -> None:
        unknown = set(fields) - set(IdentityForm.model_fields)
        if unknown:
            raise ValueError(f"Unknown identity fields: {', '.join(sorted(unknown))}")
        self.identity = self.identity.model_copy(update=fields)

    def set_selfie(self, file: UploadedFile | None) -> None:
        self.selfie = dataclasses.replace(self.selfie, selfie=file)

    def set_selfie_id_pair(self, front: UploadedFile | None, back: UploadedFile | None) -> None:
        self.selfie = dataclasses.replace(self.selfie, id_front=front, id_back=back)

    def set_selfie_passport(self, file: UploadedFile | None) -> None:
        self.selfie = dataclasses.replace(self.selfie, passport=file)

    def set_id_document(self, index: int, **changes: Any) -> None:
        """Edit one id-docs slot (``doc_type``, ``front_file``, ``back_file``)."""
        if not 0 <= index < len(self.id_documents):
            raise IndexError(f"No id document slot {index}")
        self.id_documents[index] = dataclasses.replace(self.id_documents[index], **changes)

    def set_address_document(self, file: UploadedFile | None) -> None:
        self.address_document = file

    def update_address_meta(self, **fields: str) -> None:
        unknown = set(fields) - set(AddressMeta.model_fields)
        if unknown:
            raise ValueError(f"Unknown address fields: {', '.join(sorted(unknown))}")
        self.address_meta = self.address_meta.model_copy(update=fields)

    # ------------------------------------------------------------------
    # Camera
    # ------------------------------------------------------------------

    async def check_camera(
        self, enumerate_devices: Callable[[], Awaitable[list[MediaDeviceInfo]]] | None = None
    ) -> str:
        """Check camera availability; the message is shown on the selfie step."""
        self.camera_message = await detect_camera(enumerate_devices)
        return self.camera_message

    def capture_selfie(self, camera: CameraSession) -> bool:
        """Take the selfie from a live camera session; requires a detected face."""
        try:
            selfie = camera.capture()
        except CaptureError as exc:
            self.camera_error = str(exc)
            return False
        self.camera_error = None
        self.set_selfie(selfie)
        return True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _move(self, target: StepId) -> None:
        current = self.current_step
        if target not in StepId.valid_transitions()[current]:
            raise InvalidTransitionError(f"Cannot move from {current.value} to {target.value}")
        logger.debug("Wizard step %s -> %s", current.value, target.value)
        self.session.current_step = target

    async def _call(self, step: StepId, call: Callable[[], Awaitable[T]]) -> T | None:
        """Run one gateway call with the loading indicator.

        Returns None on failure, and also when the wizard was restarted while
        the call was pending.
        """
        generation = self._generation
        self._errors[step] = None
        self.is_loading = True
        self.loading_message = LOADING_MESSAGES[step]
        try:
            result = await call()
        except KycRequestError as exc:
            if generation == self._generation:
                logger.info("Step %s submission failed: %s", step.value, exc)
                self._errors[step] = str(exc) or GENERIC_ERROR_MESSAGE
            return None
        finally:
            if generation == self._generation:
                self.is_loading = False
        if generation != self._generation:
            logger.debug("Dropping %s result from before restart", step.value)
            return None
        return result

    def _require_applicant(self, step: StepId) -> str | None:
        if not self.session.applicant_id:
            self._errors[step] = NOT_REGISTERED_MESSAGE
            return None
        return self.session.applicant_id

    async def next(self) -> None:
        """Submit the current step and advance when the backend accepts it.

        On the address step this only opens the review dialog; the network
        call fires from ``confirm_address``. No-op while a request is pending.
        """
        if self.is_loading:
            return
        step = self.current_step
        if step is StepId.IDENTITY:
            await self._submit_identity()
        elif step is StepId.SELFIE:
            await self._submit_selfie()
        elif step is StepId.ID_DOCS:
            await self._submit_id_documents()
        elif step is StepId.ADDRESS:
            self._open_confirm()

    def back(self) -> None:
        """Move one step back; drafts are kept unmodified."""
        if self.back_disabled:
            return
        self._move(self.current_step.previous_step())

    def restart(self) -> None:
        """Reset every draft and the session; the only way out of ``success``."""
        logger.debug("Wizard restarted from %s", self.current_step.value)
        self._generation += 1
        self._reset()

    async def _submit_identity(self) -> None:
        if self.identity_field_errors:
            self._errors[StepId.IDENTITY] = IDENTITY_INCOMPLETE_MESSAGE
            return
        identity = self.identity
        result = await self._call(StepId.IDENTITY, lambda: self._gateway.register(identity))
        if result is None:
            return
        self.session.applicant_id = result.applicant_id
        self._move(StepId.SELFIE)

    async def _submit_selfie(self) -> None:
        applicant_id = self._require_applicant(StepId.SELFIE)
        if applicant_id is None:
            return
        if not selfie_ready(self.selfie):
            self._errors[StepId.SELFIE] = SELFIE_MISSING_MESSAGE
            return
        draft = self.selfie
        result = await self._call(
            StepId.SELFIE, lambda: self._gateway.upload_selfie(applicant_id, draft)
        )
        if result is None:
            return
        self.selfie_result = result
        self._move(StepId.ID_DOCS)

    async def _submit_id_documents(self) -> None:
        applicant_id = self._require_applicant(StepId.ID_DOCS)
        if applicant_id is None:
            return
        message = id_documents_error(self.id_documents)
        if message is not None:
            self._errors[StepId.ID_DOCS] = message
            return
        documents = list(self.id_documents)
        result = await self._call(
            StepId.ID_DOCS, lambda: self._gateway.upload_id_documents(applicant_id, documents)
        )
        if result is None:
            return
        self._move(StepId.ADDRESS)

    def _open_confirm(self) -> None:
        if not address_ready(self.address_document, self.address_meta):
            self._errors[StepId.ADDRESS] = ADDRESS_INCOMPLETE_MESSAGE
            return
        self._errors[StepId.ADDRESS] = None
        self.confirm_open = True

    def cancel_confirm(self) -> None:
        self.confirm_open = False

    async def confirm_address(self) -> None:
        """Submit proof of address after the applicant confirmed the review dialog."""
        if not self.confirm_open or self.is_loading:
            return
        self.confirm_open = False
        applicant_id = self._require_applicant(StepId.ADDRESS)
        if applicant_id is None:
            return
        document = self.address_document
        if document is None or not address_ready(document, self.address_meta):
            self._errors[StepId.ADDRESS] = ADDRESS_INCOMPLETE_MESSAGE
            return
        meta = self.address_meta
        result = await self._call(
            StepId.ADDRESS, lambda: self._gateway.upload_address(applicant_id, document, meta)
        )
        if result is None:
            return
        self.address_result = result
        self._move(StepId.SUCCESS)
