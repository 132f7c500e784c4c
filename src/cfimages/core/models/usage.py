"""Account usage counters."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class UsageStats(BaseModel):
    """Images currently stored versus the plan's allowed maximum."""

    model_config = ConfigDict(frozen=True)

    current: StrictInt = Field(..., description="Images currently stored")
    allowed: StrictInt = Field(..., description="Maximum images allowed by the plan")

    @property
    def percentage_used(self) -> float:
        if self.allowed > 0:
            return self.current / self.allowed * 100
        return 0.0

    @property
    def remaining(self) -> int:
        return max(self.allowed - self.current, 0)
