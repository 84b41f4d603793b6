"""Statistics snapshot models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

# Storage size could not be determined (unsupported dialect or failed size query)
UNKNOWN_STORAGE_SIZE = -1


class ResponseCodeCount(BaseModel):
    """Number of results sharing one HTTP response code."""

    code: int = Field(..., description="HTTP response code")
    count: int = Field(..., ge=0, description="Number of results with this code")

    model_config = {"frozen": True}


class StatisticsSnapshot(BaseModel):
    """Point-in-time storage and content statistics for the results database."""

    storage_bytes: int = Field(
        ...,
        ge=UNKNOWN_STORAGE_SIZE,
        alias="dbsize",
        description="Estimated storage size in bytes, -1 when unknown",
    )
    result_count: int = Field(..., ge=0, alias="results", description="Result rows")
    header_count: int = Field(..., ge=0, alias="headers", description="Header rows")
    network_log_count: int = Field(
        ..., ge=0, alias="networklogs", description="Network log rows"
    )
    console_log_count: int = Field(
        ..., ge=0, alias="consolelogs", description="Console log rows"
    )
    response_code_distribution: tuple[ResponseCodeCount, ...] = Field(
        default=(),
        alias="response_code_stats",
        description="Result counts grouped by response code",
    )

    @field_validator("response_code_distribution")
    @classmethod
    def validate_unique_codes(
        cls, v: tuple[ResponseCodeCount, ...]
    ) -> tuple[ResponseCodeCount, ...]:
        """Reject distributions that list the same response code twice."""
        seen: set[int] = set()
        for entry in v:
            if entry.code in seen:
                raise ValueError(f"Duplicate response code in distribution: {entry.code}")
            seen.add(entry.code)
        return v

    @property
    def storage_known(self) -> bool:
        """Whether the storage size query produced a value."""
        return self.storage_bytes != UNKNOWN_STORAGE_SIZE

    @property
    def storage_human(self) -> Optional[str]:
        """Human-readable storage size."""
        if not self.storage_known:
            return None

        size = float(self.storage_bytes)
        for unit in ["B", "KB", "MB", "GB", "TB"]:
            if size < 1024.0:
                return f"{size:.2f} {unit}"
            size /= 1024.0
        return f"{size:.2f} PB"

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "dbsize": 4096,
                    "results": 3,
                    "headers": 5,
                    "networklogs": 0,
                    "consolelogs": 2,
                    "response_code_stats": [
                        {"code": 200, "count": 2},
                        {"code": 404, "count": 1},
                    ],
                }
            ]
        },
    }
