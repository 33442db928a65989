# Pydantic data models for advisory diagnostics: Finding, Location.

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class Location(BaseModel):
    """Where in the C# source a finding points (file, line, column)."""

    path: Path
    line: int = Field(..., ge=1, description="1-based line number")
    column: int = Field(..., ge=1, description="1-based column number")
    end_line: Optional[int] = Field(None, ge=1)
    end_column: Optional[int] = Field(None, ge=1)
    snippet: Optional[str] = None


class Finding(BaseModel):
    """A single advisory diagnostic (e.g. DP0002 on a class that is not partial)."""

    rule_id: str
    message: str
    location: Optional[Location] = None
    symbol: Optional[str] = Field(None, description="Qualified name of the type concerned")
    severity: str = Field(default="warning", description="e.g. error, warning, info")
