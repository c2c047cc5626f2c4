"""Data models for the NVC bundle pipeline."""

from nvc_bundle.models.model_nvc import (
    Bundle,
    BundleEntry,
    Coding,
    Compose,
    Concept,
    Designation,
    DesignationUse,
    Extension,
    Include,
    Meta,
    ValueCodeableConcept,
    ValueSet,
)
from nvc_bundle.models.profile import BILINGUAL, PROFILES, SIMPLE, RunProfile, get_profile

__all__ = [
    "Bundle",
    "BundleEntry",
    "Coding",
    "Compose",
    "Concept",
    "Designation",
    "DesignationUse",
    "Extension",
    "Include",
    "Meta",
    "ValueCodeableConcept",
    "ValueSet",
    "RunProfile",
    "SIMPLE",
    "BILINGUAL",
    "PROFILES",
    "get_profile",
]
