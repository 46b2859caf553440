# ABOUTME: Run report models for the ingestion and enrichment pipelines
# ABOUTME: Each processed article yields an ItemOutcome; a RunReport collects them in order

from enum import Enum

from pydantic import BaseModel, Field


class OutcomeStatus(str, Enum):
    """Result of processing a single article in a pipeline run."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class ItemOutcome(BaseModel):
    """What happened to one article."""

    title: str | None = Field(default=None, description="Article title, when known")
    url: str | None = Field(default=None, description="Article source URL, when known")
    status: OutcomeStatus
    reason: str = Field(default="", description="Why the item was skipped or failed")
    record_id: str | None = Field(default=None, description="Identifier of the record written, if any")


class RunReport(BaseModel):
    """Ordered outcomes of a pipeline run."""

    pipeline: str
    outcomes: list[ItemOutcome] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.outcomes)

    def add(self, outcome: ItemOutcome) -> ItemOutcome:
        self.outcomes.append(outcome)
        return outcome

    def succeeded(self, title: str | None, url: str | None, record_id: str | None = None) -> ItemOutcome:
        return self.add(ItemOutcome(title=title, url=url, status=OutcomeStatus.SUCCEEDED, record_id=record_id))

    def skipped(self, title: str | None, url: str | None, reason: str, record_id: str | None = None) -> ItemOutcome:
        return self.add(
            ItemOutcome(title=title, url=url, status=OutcomeStatus.SKIPPED, reason=reason, record_id=record_id)
        )

    def failed(self, title: str | None, url: str | None, reason: str) -> ItemOutcome:
        return self.add(ItemOutcome(title=title, url=url, status=OutcomeStatus.FAILED, reason=reason))

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def succeeded_count(self) -> int:
        return self.count(OutcomeStatus.SUCCEEDED)

    @property
    def skipped_count(self) -> int:
        return self.count(OutcomeStatus.SKIPPED)

    @property
    def failed_count(self) -> int:
        return self.count(OutcomeStatus.FAILED)

    def summary(self) -> dict[str, int]:
        return {
            "total": len(self.outcomes),
            "succeeded": self.succeeded_count,
            "skipped": self.skipped_count,
            "failed": self.failed_count,
        }
