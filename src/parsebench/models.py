"""Data models for the parse pipeline"""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from parsebench.utils import default_worker_count, format_duration


class PoolConfig(BaseModel):
    """Worker pool configuration, fixed for the lifetime of a run."""

    worker_count: int = Field(
        default_factory=default_worker_count, ge=1, description='Number of concurrent parse workers'
    )
    language: str = Field('typescript', description='Grammar used by every worker')
    extensions: tuple[str, ...] = Field(('.ts',), description='File suffixes collected during discovery')

    @field_validator('extensions')
    @classmethod
    def normalize_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError('at least one extension is required')
        return tuple(ext if ext.startswith('.') else f'.{ext}' for ext in v)


@dataclass(frozen=True)
class ResultRecord:
    """Outcome of one successfully parsed file.

    Attributes:
        path: File path as discovered
        duration: Wall-clock parse time in seconds, I/O excluded
        element_count: Number of nodes in the syntax tree, root included
    """

    path: str
    duration: float
    element_count: int

    def format_line(self) -> str:
        return f'Parsed {self.path} in {format_duration(self.duration)} with {self.element_count} elements'
