"""Point payload schemas persisted in the vector store."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocChunkPayload(BaseModel):
    type: Literal["doc_chunk"] = "doc_chunk"
    file: str
    text: str
    section_title: Optional[str] = None
    section_index: Optional[int] = None
    chunk_index: int
    char_count: int
    processed_at: str


class RecursiveChunkPayload(DocChunkPayload):
    original_index: int
    has_overlap: bool


class FunctionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: Literal["function", "method", "arrow_function"]
    class_name: Optional[str] = Field(default=None, alias="class")
    file: str
    start_line: int
    end_line: int
    start_column: int
    end_column: int
    is_static: bool = False
    code_snippet: str
    processed_at: str

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
