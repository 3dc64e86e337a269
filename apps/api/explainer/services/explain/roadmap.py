from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Union

from pydantic import BaseModel, Field


# "Title, https://..." 형태에서 URL 앞의 첫 쉼표만 구분자로 사용
_RESOURCE_SPLIT_PATTERN = re.compile(r",(?=\s*https?://)")


class Resource(BaseModel):
    title: str = ""
    url: str = ""


class RoadmapStep(BaseModel):
    stepName: str = ""
    action: str = ""
    timeEstimate: str = ""
    resources: list[Resource] = Field(default_factory=list)
    exercise: str = ""


@dataclass(frozen=True)
class StringResource:
    text: str


@dataclass(frozen=True)
class ObjectResource:
    fields: dict[str, Any]


RawResource = Union[StringResource, ObjectResource]


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def classify_resource(value: Any) -> RawResource | None:
    if value is None:
        return None
    if isinstance(value, dict):
        return ObjectResource(fields=value)
    if isinstance(value, str):
        return StringResource(text=value)
    return StringResource(text=_as_text(value))


def to_resource(raw: RawResource) -> Resource:
    if isinstance(raw, ObjectResource):
        title = _as_text(raw.fields.get("title")) or _as_text(raw.fields.get("name"))
        url = _as_text(raw.fields.get("url")) or _as_text(raw.fields.get("link"))
        return Resource(title=title, url=url)

    parts = _RESOURCE_SPLIT_PATTERN.split(raw.text)
    if len(parts) >= 2:
        url = parts[1].strip()
        return Resource(title=parts[0].strip() or url, url=url)
    return Resource(title=raw.text.strip(), url="")


def normalize_resources(value: Any) -> list[Resource]:
    if not isinstance(value, list):
        return []
    resources: list[Resource] = []
    for item in value:
        raw = classify_resource(item)
        if raw is not None:
            resources.append(to_resource(raw))
    return resources


def normalize_step(item: Any) -> RoadmapStep:
    if isinstance(item, str):
        return RoadmapStep(stepName=item.strip())
    if not isinstance(item, dict):
        return RoadmapStep()
    return RoadmapStep(
        stepName=_as_text(item.get("stepName")),
        action=_as_text(item.get("action")),
        timeEstimate=_as_text(item.get("timeEstimate")),
        resources=normalize_resources(item.get("resources")),
        exercise=_as_text(item.get("exercise")),
    )


def normalize_roadmap(value: Any) -> list[RoadmapStep]:
    if not isinstance(value, list):
        return []
    return [normalize_step(item) for item in value]
