"""Pydantic models for the NVC FHIR Bundle.

Only the fields the flattener reads are modelled. The upstream document is
externally supplied, so apart from ``meta.versionId`` nothing in it fails
validation: list fields drop items that are not JSON objects, object fields
that are not objects become None, and scalar fields that are not strings or
numbers take their default.
"""

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

T = TypeVar("T")


def _objects_only(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _object_or_none(value: Any) -> dict | None:
    return value if isinstance(value, dict) else None


def _scalar_or_none(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _scalar_or_empty(value: Any) -> str:
    text = _scalar_or_none(value)
    return "" if text is None else text


ObjectList = Annotated[list[T], BeforeValidator(_objects_only)]
Text = Annotated[str, BeforeValidator(_scalar_or_empty)]
OptionalText = Annotated[str | None, BeforeValidator(_scalar_or_none)]


class FhirModel(BaseModel):
    """Shared config: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Coding(FhirModel):
    system: Text = ""
    code: OptionalText = None
    display: Text = ""


class ValueCodeableConcept(FhirModel):
    coding: ObjectList[Coding] = []
    text: Text = ""


class Extension(FhirModel):
    """Recursive annotation node attached to a Concept."""

    url: Text = ""
    extension: Annotated[list["Extension"], BeforeValidator(_objects_only)] = []
    value_codeable_concept: Annotated[
        ValueCodeableConcept | None, BeforeValidator(_object_or_none)
    ] = Field(default=None, alias="valueCodeableConcept")


class DesignationUse(FhirModel):
    system: Text = ""
    code: Text = ""


class Designation(FhirModel):
    """Localized alternate display string for a Concept."""

    language: Text = ""
    use: Annotated[DesignationUse | None, BeforeValidator(_object_or_none)] = None
    value: Text = ""


class Concept(FhirModel):
    """One coded entry: a vaccine, a disease or an organization."""

    code: OptionalText = None
    display: Text = ""
    designation: ObjectList[Designation] = []
    extension: ObjectList[Extension] = []


class Include(FhirModel):
    system: Text = ""
    version: Text = ""
    concept: ObjectList[Concept] = []


class Compose(FhirModel):
    include: ObjectList[Include] = []


class ValueSet(FhirModel):
    id: Text = ""
    url: Text = ""
    status: Text = ""
    compose: Annotated[Compose | None, BeforeValidator(_object_or_none)] = None

    def concepts(self) -> list[Concept]:
        """All concepts of every include, in document order."""
        if self.compose is None:
            return []
        return [concept for include in self.compose.include for concept in include.concept]


class Meta(BaseModel):
    """Bundle metadata. ``versionId`` is required; it drives change detection."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    version_id: str = Field(alias="versionId")
    last_updated: OptionalText = Field(default=None, alias="lastUpdated")


class BundleEntry(FhirModel):
    full_url: Text = Field(default="", alias="fullUrl")
    resource: Annotated[ValueSet | None, BeforeValidator(_object_or_none)] = None


class Bundle(FhirModel):
    """Root document returned by ``/v1/Bundle/NVC``."""

    id: Text = ""
    type: Text = ""
    meta: Meta
    entry: ObjectList[BundleEntry] = []

    @property
    def version_id(self) -> str:
        return self.meta.version_id

    def value_sets(self) -> list[ValueSet]:
        return [entry.resource for entry in self.entry if entry.resource is not None]


Extension.model_rebuild()
