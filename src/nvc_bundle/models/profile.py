"""Run profile: which languages to emit, whether to gate writes, which lookups to build."""

from pydantic import BaseModel, ConfigDict, field_validator

from nvc_bundle.constants import DEFAULT_LANGUAGES, DEFAULT_TIMEOUT


class RunProfile(BaseModel):
    """Describes one pipeline run.

    An empty ``languages`` tuple selects the raw record shape
    (``displayName`` / ``disease`` / ``MAH``); otherwise one set of
    ``display<LANG>`` / ``disease<LANG>`` / ``MAH<LANG>`` keys is emitted per
    language, in order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "custom"
    languages: tuple[str, ...] = DEFAULT_LANGUAGES
    gate_on_version: bool = False
    build_lookups: bool = True
    timeout_seconds: float | None = DEFAULT_TIMEOUT

    @field_validator("languages", mode="before")
    @classmethod
    def normalize_languages(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        seen: list[str] = []
        for lang in v:
            lang = str(lang).strip().lower()
            if lang and lang not in seen:
                seen.append(lang)
        return tuple(seen)


SIMPLE = RunProfile(
    name="simple",
    languages=(),
    gate_on_version=True,
    build_lookups=False,
    timeout_seconds=None,
)

BILINGUAL = RunProfile(
    name="bilingual",
    languages=DEFAULT_LANGUAGES,
    gate_on_version=False,
    build_lookups=True,
    timeout_seconds=DEFAULT_TIMEOUT,
)

PROFILES: dict[str, RunProfile] = {SIMPLE.name: SIMPLE, BILINGUAL.name: BILINGUAL}


def get_profile(name: str) -> RunProfile:
    """Return the preset profile registered under *name*."""
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown profile '{name}'; expected one of {sorted(PROFILES)}"
        ) from None
