from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class InlinedReference(BaseModel):
    kind: Literal["stylesheet", "script"]
    reference: str
    action: Literal["inlined", "remote", "missing"]
    main_script: bool = False


class ExportResult(BaseModel):
    output_path: str
    entry_document: str
    embedded_paths: List[str] = Field(default_factory=list)
    references: List[InlinedReference] = Field(default_factory=list)
    shim_placement: Optional[str] = None
    size_bytes: int = 0

    @property
    def inlined_count(self) -> int:
        return sum(1 for r in self.references if r.action == "inlined")
