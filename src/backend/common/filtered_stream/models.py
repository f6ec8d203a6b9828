from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, NonNegativeInt, field_validator, model_validator


class _ResponseModel(BaseModel):
    # Responses are read-only once parsed. Unknown keys from the API are ignored.
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _fold_key_case(cls, data):
        # Keys match field names case-insensitively, e.g. `DATA` or `Id`.
        if not isinstance(data, dict):
            return data
        names = {name.lower(): name for name in cls.model_fields}
        return {
            names.get(key.lower(), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }


def _wire_field(name: str, default: str = ""):
    # Serialize with the exact upstream casing.
    return Field(
        default=default,
        validation_alias=AliasChoices(name, name.lower()),
        serialization_alias=name,
    )


class DataRule(_ResponseModel):
    value: str = _wire_field("Value")
    tag: str = _wire_field("Tag")
    id: str = ""


class MetaSummary(_ResponseModel):
    created: NonNegativeInt = 0
    not_created: NonNegativeInt = 0
    deleted: NonNegativeInt = 0
    not_deleted: NonNegativeInt = 0


class MetaRule(_ResponseModel):
    sent: str = ""
    summary: MetaSummary = Field(default_factory=MetaSummary)
    result_count: NonNegativeInt = 0


class ErrorRule(_ResponseModel):
    value: str = _wire_field("Value")
    id: str = ""
    title: str = ""
    type: str = ""


class RuleResponse(_ResponseModel):
    """
    Body returned when adding, deleting or listing filtered stream rules.

    A partially successful request is still a normal response: accepted rules
    are in `data`, rejected ones in `errors`. Callers should inspect both.
    """

    data: Tuple[DataRule, ...] = Field(
        default=(),
        validation_alias=AliasChoices("Data", "data"),
        serialization_alias="Data",
    )
    meta: MetaRule = Field(
        default_factory=MetaRule,
        validation_alias=AliasChoices("Meta", "meta"),
        serialization_alias="Meta",
    )
    errors: Tuple[ErrorRule, ...] = Field(
        default=(),
        validation_alias=AliasChoices("Errors", "errors"),
        serialization_alias="Errors",
    )

    @field_validator("data", "errors", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return () if value is None else value

    @field_validator("meta", mode="before")
    @classmethod
    def _null_meta(cls, value):
        return {} if value is None else value

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class RuleValue(BaseModel):
    value: str
    tag: Optional[str] = None


class CreateRulesRequest(BaseModel):
    add: List[RuleValue] = Field(default_factory=list)


class DeleteRuleTargets(BaseModel):
    ids: Optional[List[str]] = None
    values: Optional[List[str]] = None


class DeleteRulesRequest(BaseModel):
    delete: DeleteRuleTargets = Field(default_factory=DeleteRuleTargets)

    @classmethod
    def by_ids(cls, *ids: str) -> "DeleteRulesRequest":
        return cls(delete=DeleteRuleTargets(ids=list(ids)))

    @classmethod
    def by_values(cls, *values: str) -> "DeleteRulesRequest":
        return cls(delete=DeleteRuleTargets(values=list(values)))
