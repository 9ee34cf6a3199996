from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class DefaultsSaveRequest(BaseModel):
    """Body of a defaults save; fields are checked by the service so failures keep the error shape."""
    language: Optional[str] = Field(default=None, description="Language code, e.g. 'en' or 'pt-BR'")
    data: Optional[Any] = Field(default=None, description="Opaque configuration blob")
    password: Optional[str] = Field(default=None, description="Super admin password")


class DefaultsLoadResponse(BaseModel):
    success: bool = True
    data: Any
    language: str


class DefaultsSaveResponse(BaseModel):
    success: bool = True
    message: str


class AllDefaultsResponse(BaseModel):
    success: bool = True
    language: str
    defaults: Dict[str, Optional[Any]]
