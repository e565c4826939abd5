"""Localized session copy.

Language names are the labels offered on the language selection step. Any
other name falls back to Croatian, the agency's home locale.
"""

DEFAULT_LANGUAGE = "Hrvatski"

SUPPORTED_LANGUAGES = ("Hrvatski", "English", "German", "Italian")

WELCOME_MESSAGE = (
    "Dobar dan. Ja sam vaš B2B asistent za rezervacije. Molimo odaberite željeni jezik. \n\n"
    " Welcome. I am your B2B reservation assistant. Please select your desired language. \n\n"
    " Willkommen. Ich bin Ihr B2B-Reservierungsassistent. Bitte wählen Sie Ihre gewünschte Sprache. \n\n"
    " Benvenuto. Sono il tuo assistente di prenotazione B2B. Seleziona la lingua desiderata."
)

LANGUAGE_ECHO = "Jezik postavljen na: {language}"

INITIAL_PROMPTS = {
    "Hrvatski": (
        "Rado ću vam pomoći pronaći restorane za vaše grupe. Molim vas, navedite:\n"
        "- Destinaciju (grad ili mjesto)\n"
        "- Ukupnu veličinu grupe (npr. 45 osoba)\n"
        "- Eventualne prehrambene preferencije (npr. vegetarijanci, bez glutena)?"
    ),
    "English": (
        "I'd be happy to help you find restaurants for your groups. Please provide:\n"
        "- The destination (city or town)\n"
        "- The total group size (e.g., 45 people)\n"
        "- Any dietary preferences (e.g., vegetarian, gluten-free)?"
    ),
    "German": (
        "Gerne helfe ich Ihnen, Restaurants für Ihre Gruppen zu finden. Bitte geben Sie an:\n"
        "- Das Reiseziel (Stadt oder Ort)\n"
        "- Die gesamte Gruppengröße (z.B. 45 Personen)\n"
        "- Eventuelle Ernährungspräferenzen (z.B. vegetarisch, glutenfrei)?"
    ),
    "Italian": (
        "Sarò felice di aiutarvi a trovare ristoranti per i vostri gruppi. Vi prego di fornire:\n"
        "- La destinazione (città o paese)\n"
        "- La dimensione totale del gruppo (es. 45 persone)\n"
        "- Eventuali preferenze alimentari (es. vegetariano, senza glutine)?"
    ),
}

CANCELLED_NOTES = {
    "Hrvatski": "Odgovor je prekinut.",
    "English": "The response was cancelled.",
    "German": "Die Antwort wurde abgebrochen.",
    "Italian": "La risposta è stata annullata.",
}


def resolve_locale(language: str) -> str:
    """Map a language name to a supported locale key, falling back to Croatian."""
    return language if language in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def initial_prompt(language: str) -> str:
    """Assistant prompt shown right after a language is chosen."""
    return INITIAL_PROMPTS[resolve_locale(language)]


def cancelled_note(language: str) -> str:
    return CANCELLED_NOTES[resolve_locale(language)]
