"""Pydantic projections of Companies House payloads."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Any = None
    company_number: Any = None
    company_status: Any = None
    address_snippet: Any = None


class OfficerItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    appointed_on: Any = None
    resigned_on: Any = None
    role: Any = Field(default=None, validation_alias="officer_role")


def _items(data: Any) -> list:
    if not isinstance(data, dict):
        return []
    return data.get("items") or []


def _project(model: type[BaseModel], raw: Any) -> dict:
    # exclude_unset: fields the upstream omitted stay omitted
    return model.model_validate(raw).model_dump(exclude_unset=True)


def project_search(data: Any) -> dict:
    """Trim a search response to the fields the client uses."""
    return {"items": [_project(SearchItem, x) for x in _items(data)]}


def project_officers(data: Any) -> dict:
    """Trim an officer list, renaming officer_role to role."""
    return {"items": [_project(OfficerItem, o) for o in _items(data)]}
