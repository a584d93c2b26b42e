"""Mindmap API schemas."""

from typing import Literal

from pydantic import BaseModel


class SaveMindmapRequest(BaseModel):
    filename: str
    content: str


class MindmapFile(BaseModel):
    name: str
    mtime: int


class StatusResponse(BaseModel):
    status: Literal["success"] = "success"


class MindmapContentResponse(StatusResponse):
    content: str


class MindmapListResponse(StatusResponse):
    files: list[MindmapFile]
