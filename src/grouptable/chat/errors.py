"""Classification of backend failures into user-facing categories.

Hides how raw failures (SDK exceptions, transport errors, plain strings) are
recognized. Matching is a case-insensitive substring search over the failure's
text; the first rule that matches wins, so rule order is significant.
"""

from enum import Enum

from .locales import resolve_locale


class ErrorCategory(str, Enum):
    """User-facing category of a failed reply."""

    AUTH_CONFIGURATION = "auth_configuration"  # Key present but rejected
    RATE_LIMITED = "rate_limited"              # Quota or request rate exceeded
    NETWORK = "network"                        # Backend unreachable
    CONTENT_BLOCKED = "content_blocked"        # Safety filters stopped the reply
    API_KEY_MISSING = "api_key_missing"        # No key configured at all
    GENERIC = "generic"                        # Anything else


# (fragments, category) in priority order
CLASSIFICATION_RULES: tuple[tuple[tuple[str, ...], ErrorCategory], ...] = (
    (("api key not valid",), ErrorCategory.AUTH_CONFIGURATION),
    (("429", "resource has been exhausted"), ErrorCategory.RATE_LIMITED),
    (("network", "failed to fetch"), ErrorCategory.NETWORK),
    (("candidate was blocked due to safety",), ErrorCategory.CONTENT_BLOCKED),
    (("api key is not configured",), ErrorCategory.API_KEY_MISSING),
)

ERROR_MESSAGES: dict[str, dict[ErrorCategory, str]] = {
    "Hrvatski": {
        ErrorCategory.AUTH_CONFIGURATION: "API ključ nije valjan. Molimo provjerite konfiguraciju.",
        ErrorCategory.RATE_LIMITED: "Trenutno je previše zahtjeva. Molimo pokušajte ponovno za nekoliko trenutaka.",
        ErrorCategory.NETWORK: "Došlo je do mrežne pogreške. Provjerite internetsku vezu i pokušajte ponovno.",
        ErrorCategory.CONTENT_BLOCKED: "Odgovor su blokirali sigurnosni filtri. Molimo preformulirajte upit.",
        ErrorCategory.API_KEY_MISSING: "API ključ nije konfiguriran. Obratite se administratoru.",
        ErrorCategory.GENERIC: "Nažalost, došlo je do pogreške. Molimo pokušajte ponovno.",
    },
    "English": {
        ErrorCategory.AUTH_CONFIGURATION: "The API key is not valid. Please check the configuration.",
        ErrorCategory.RATE_LIMITED: "Too many requests right now. Please try again in a few moments.",
        ErrorCategory.NETWORK: "A network error occurred. Please check your connection and try again.",
        ErrorCategory.CONTENT_BLOCKED: "The response was blocked by safety filters. Please rephrase your request.",
        ErrorCategory.API_KEY_MISSING: "The API key is not configured. Please contact your administrator.",
        ErrorCategory.GENERIC: "I am sorry, but I encountered an error. Please try again.",
    },
    "German": {
        ErrorCategory.AUTH_CONFIGURATION: "Der API-Schlüssel ist ungültig. Bitte überprüfen Sie die Konfiguration.",
        ErrorCategory.RATE_LIMITED: "Derzeit gibt es zu viele Anfragen. Bitte versuchen Sie es in einigen Augenblicken erneut.",
        ErrorCategory.NETWORK: "Es ist ein Netzwerkfehler aufgetreten. Bitte überprüfen Sie Ihre Verbindung.",
        ErrorCategory.CONTENT_BLOCKED: "Die Antwort wurde von Sicherheitsfiltern blockiert. Bitte formulieren Sie Ihre Anfrage um.",
        ErrorCategory.API_KEY_MISSING: "Der API-Schlüssel ist nicht konfiguriert. Bitte wenden Sie sich an Ihren Administrator.",
        ErrorCategory.GENERIC: "Es tut mir leid, es ist ein Fehler aufgetreten. Bitte versuchen Sie es erneut.",
    },
    "Italian": {
        ErrorCategory.AUTH_CONFIGURATION: "La chiave API non è valida. Si prega di verificare la configurazione.",
        ErrorCategory.RATE_LIMITED: "Troppe richieste in questo momento. Riprovate tra qualche istante.",
        ErrorCategory.NETWORK: "Si è verificato un errore di rete. Controllate la connessione e riprovate.",
        ErrorCategory.CONTENT_BLOCKED: "La risposta è stata bloccata dai filtri di sicurezza. Riformulate la richiesta.",
        ErrorCategory.API_KEY_MISSING: "La chiave API non è configurata. Contattate l'amministratore.",
        ErrorCategory.GENERIC: "Mi dispiace, si è verificato un errore. Riprovate.",
    },
}


def failure_text(failure: BaseException | str) -> str:
    """Textual description of a failure used for matching."""
    if isinstance(failure, str):
        return failure
    return str(failure) or type(failure).__name__


def classify(failure: BaseException | str) -> ErrorCategory:
    """Map a raw failure to its error category.

    Args:
        failure: Exception raised by the backend, or its message

    Returns:
        The category of the first matching rule, GENERIC if none matches
    """
    text = failure_text(failure).lower()
    for fragments, category in CLASSIFICATION_RULES:
        if any(fragment in text for fragment in fragments):
            return category
    return ErrorCategory.GENERIC


def describe_error(category: ErrorCategory, language: str) -> str:
    """User-facing sentence for a category in the given chat language."""
    return ERROR_MESSAGES[resolve_locale(language)][category]
