"""Keyword scan that biases prompts toward features the user mentioned."""

FEATURE_VOCABULARY: tuple[str, ...] = (
    "authentication",
    "login",
    "user management",
    "dashboard",
    "forms",
    "database",
    "api",
    "responsive design",
    "search",
    "payments",
    "cart",
    "notifications",
    "real-time",
    "chat",
    "file upload",
    "admin panel",
)


def extract_features(description: str) -> list[str]:
    """Vocabulary terms found in ``description``, in vocabulary order.

    A term matches as a plain substring of the case-folded text, either as
    written or with its spaces removed ("fileupload"). No stemming.
    """
    text = description.casefold()
    return [
        term for term in FEATURE_VOCABULARY if term in text or term.replace(" ", "") in text
    ]
