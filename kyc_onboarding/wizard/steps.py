# This project was developed with assistance from AI tools.
"""Wizard step catalogue.

Steps run strictly forward: identity -> selfie -> id-docs -> address -> success.
Every step but ``success`` may move one step back; ``success`` is terminal and
only a restart leaves it.
"""

import enum
from dataclasses import dataclass


class StepId(str, enum.Enum):
    IDENTITY = "identity"
    SELFIE = "selfie"
    ID_DOCS = "id-docs"
    ADDRESS = "address"
    SUCCESS = "success"

    @classmethod
    def ordered(cls) -> list["StepId"]:
        return [cls.IDENTITY, cls.SELFIE, cls.ID_DOCS, cls.ADDRESS, cls.SUCCESS]

    @classmethod
    def terminal_steps(cls) -> frozenset["StepId"]:
        return frozenset({cls.SUCCESS})

    @classmethod
    def valid_transitions(cls) -> dict["StepId", frozenset["StepId"]]:
        """Allowed moves: one step forward or one step back, none out of success."""
        return {
            cls.IDENTITY: frozenset({cls.SELFIE}),
            cls.SELFIE: frozenset({cls.ID_DOCS, cls.IDENTITY}),
            cls.ID_DOCS: frozenset({cls.ADDRESS, cls.SELFIE}),
            cls.ADDRESS: frozenset({cls.SUCCESS, cls.ID_DOCS}),
            cls.SUCCESS: frozenset(),
        }

    @property
    def position(self) -> int:
        return StepId.ordered().index(self)

    def next_step(self) -> "StepId | None":
        order = StepId.ordered()
        return order[self.position + 1] if self.position + 1 < len(order) else None

    def previous_step(self) -> "StepId | None":
        if self in StepId.terminal_steps() or self.position == 0:
            return None
        return StepId.ordered()[self.position - 1]


@dataclass(frozen=True)
class StepDefinition:
    id: StepId
    title: str
    description: str


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(
        StepId.IDENTITY,
        "Identity Basics",
        "Required email, phone, legal name, date of birth, and address.",
    ),
    StepDefinition(
        StepId.SELFIE,
        "Selfie Capture",
        "Capture a live selfie with face detection.",
    ),
    StepDefinition(
        StepId.ID_DOCS,
        "ID Upload",
        "Upload front and back of two identity documents.",
    ),
    StepDefinition(
        StepId.ADDRESS,
        "Proof of Address",
        "Attach a recent bill, bank statement, or government letter.",
    ),
    StepDefinition(
        StepId.SUCCESS,
        "Complete",
        "Submission confirmation.",
    ),
)

LOADING_MESSAGES: dict[StepId, str] = {
    StepId.IDENTITY: "Registering applicant...",
    StepId.SELFIE: "Uploading biometric evidence...",
    StepId.ID_DOCS: "Uploading ID documents...",
    StepId.ADDRESS: "Uploading proof of address...",
}


class StepStatus(str, enum.Enum):
    COMPLETE = "complete"
    CURRENT = "current"
    UPCOMING = "upcoming"


def step_progress(current: StepId) -> list[tuple[StepDefinition, StepStatus]]:
    """Status of every non-terminal step relative to ``current`` (the stepper)."""
    progress = []
    for step in STEPS:
        if step.id in StepId.terminal_steps():
            continue
        if step.id.position < current.position:
            status = StepStatus.COMPLETE
        elif step.id == current:
            status = StepStatus.CURRENT
        else:
            status = StepStatus.UPCOMING
        progress.append((step, status))
    return progress


def progress_label(current: StepId) -> str | None:
    """``Step N of M`` over the non-terminal steps; None once the wizard is done."""
    if current in StepId.terminal_steps():
        return None
    total = len(STEPS) - len(StepId.terminal_steps())
    return f"Step {current.position + 1} of {total}"
