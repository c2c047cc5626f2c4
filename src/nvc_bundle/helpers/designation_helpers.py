from nvc_bundle.constants import NAMING_SYSTEM_URL
from nvc_bundle.models.model_nvc import Concept


def display_term_code(language: str) -> str:
    return f"{language}DisplayTerm"


def select_display(
    concept: Concept, language: str, naming_system: str = NAMING_SYSTEM_URL
) -> str:
    """Return the designation for *language* whose use is the NVC display term.

    Exact match on language, use system and use code; otherwise the concept's
    own display.
    """
    code = display_term_code(language)
    for designation in concept.designation:
        use = designation.use
        if (
            designation.language == language
            and use is not None
            and use.system == naming_system
            and use.code == code
        ):
            return designation.value
    return concept.display


def localized_names(
    concept: Concept,
    languages: tuple[str, ...],
    naming_system: str = NAMING_SYSTEM_URL,
) -> dict[str, str]:
    return {lang: select_display(concept, lang, naming_system) for lang in languages}
