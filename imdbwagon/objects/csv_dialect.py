"""Format of the derivative CSV files written by imdbpy2sql."""

from typing import Optional

from pydantic import BaseModel, Field


class CsvDialect(BaseModel):
    """Settings used to read headerless table dumps for the fallback load."""

    extension: str = Field(default=".csv", description="Extension of table dump files")
    delimiter: str = Field(default=",", description="Field separator")
    quotechar: str = Field(default='"', description="Quote character around strings")
    escapechar: Optional[str] = Field(default=None, description="Escape character, None for doubled quotes")
    null_marker: str = Field(default="NULL", description="Token written for SQL NULL")
    encoding: str = Field(default="utf-8")
