from typing import List

from pydantic import BaseModel


class GuideTaskOut(BaseModel):
    number: int
    title: str
    kind: str
    file: str
    auto_check: bool


class GuideTasksOut(BaseModel):
    tasks: List[GuideTaskOut]


class GuideCheckOut(BaseModel):
    passed: bool
    message: str
