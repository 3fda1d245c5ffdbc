"""Localized user-facing strings.

Hidden design decisions:
- Which locales ship with the package
- Fallback locale when a tag is unknown
- Wording of greetings, error descriptions and recovery hints

The orchestration core never branches on language; it asks this module
for a string table and uses whatever comes back.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LOCALE = "es"


class LocalizedStrings(BaseModel):
    """String table for a single locale."""

    model_config = ConfigDict(frozen=True)

    locale: str = Field(description="Language code this table was resolved for")
    greeting: str = Field(description="Greeting shown when a conversation starts")
    errors: dict[str, str] = Field(description="User-facing description per error kind")
    recovery: dict[str, str] = Field(description="Recovery suggestion per error kind")

    def error_message(self, kind: str, detail: str | None = None) -> str:
        """Get the description for an error kind, appending detail for general errors."""
        message = self.errors.get(kind, self.errors["general"])
        if kind == "general" and detail:
            return f"{message} {detail}"
        return message

    def recovery_suggestion(self, kind: str) -> str:
        """Get the recovery suggestion for an error kind."""
        return self.recovery.get(kind, self.recovery["general"])


_TABLES: dict[str, dict] = {
    "es": {
        "greeting": (
            "👋 ¡Hola! Soy tu asistente legal. Envíame cualquier texto legal "
            "y te lo explicaré con palabras sencillas."
        ),
        "errors": {
            "missing_credential": "⚠️ Configuración de API no encontrada. Verifica tu clave de API.",
            "network_failure": "🌐 Error de conexión. Verifica tu conexión a internet.",
            "invalid_response": "❌ Respuesta inválida del servidor. Intenta nuevamente.",
            "content_filtered": "🚫 Contenido filtrado por políticas de seguridad.",
            "rate_limited": "⏰ Demasiadas consultas. Espera un momento antes de continuar.",
            "image_processing_failure": "🖼️ Error al procesar la imagen. Intenta con otra imagen.",
            "invalid_input": "✏️ El mensaje está vacío o es demasiado largo.",
            "general": "⚠️",
        },
        "recovery": {
            "missing_credential": "Contacta al desarrollador para configurar la API.",
            "network_failure": "Verifica tu conexión a internet e intenta nuevamente.",
            "invalid_response": "El servidor está experimentando problemas. Intenta más tarde.",
            "content_filtered": "Reformula tu mensaje evitando contenido inapropiado.",
            "rate_limited": "Espera unos minutos antes de enviar otro mensaje.",
            "image_processing_failure": "Asegúrate de que la imagen sea clara y esté en formato válido.",
            "invalid_input": "Escribe un mensaje más corto e intenta de nuevo.",
            "general": "Intenta nuevamente o contacta soporte si el problema persiste.",
        },
    },
    "en": {
        "greeting": (
            "👋 Hello! I'm your legal assistant. Send me any legal text "
            "and I'll explain it in simple terms."
        ),
        "errors": {
            "missing_credential": "⚠️ API configuration not found. Check your API key.",
            "network_failure": "🌐 Connection error. Check your internet connection.",
            "invalid_response": "❌ Invalid response from the server. Please try again.",
            "content_filtered": "🚫 Content filtered by safety policies.",
            "rate_limited": "⏰ Too many requests. Wait a moment before continuing.",
            "image_processing_failure": "🖼️ The image could not be processed. Try another image.",
            "invalid_input": "✏️ The message is empty or too long.",
            "general": "⚠️",
        },
        "recovery": {
            "missing_credential": "Contact the developer to configure the API.",
            "network_failure": "Check your internet connection and try again.",
            "invalid_response": "The server is having problems. Try again later.",
            "content_filtered": "Rephrase your message without inappropriate content.",
            "rate_limited": "Wait a few minutes before sending another message.",
            "image_processing_failure": "Make sure the image is clear and in a valid format.",
            "invalid_input": "Write a shorter message and try again.",
            "general": "Try again or contact support if the problem persists.",
        },
    },
    "fr": {
        "greeting": (
            "👋 Bonjour ! Je suis votre assistant juridique. Envoyez-moi un texte "
            "juridique et je vous l'expliquerai simplement."
        ),
        "errors": {
            "missing_credential": "⚠️ Configuration de l'API introuvable. Vérifiez votre clé d'API.",
            "network_failure": "🌐 Erreur de connexion. Vérifiez votre connexion internet.",
            "invalid_response": "❌ Réponse invalide du serveur. Veuillez réessayer.",
            "content_filtered": "🚫 Contenu filtré par les règles de sécurité.",
            "rate_limited": "⏰ Trop de requêtes. Patientez un instant avant de continuer.",
            "image_processing_failure": "🖼️ Impossible de traiter l'image. Essayez une autre image.",
            "invalid_input": "✏️ Le message est vide ou trop long.",
            "general": "⚠️",
        },
        "recovery": {
            "missing_credential": "Contactez le développeur pour configurer l'API.",
            "network_failure": "Vérifiez votre connexion internet et réessayez.",
            "invalid_response": "Le serveur rencontre des problèmes. Réessayez plus tard.",
            "content_filtered": "Reformulez votre message sans contenu inapproprié.",
            "rate_limited": "Attendez quelques minutes avant d'envoyer un autre message.",
            "image_processing_failure": "Assurez-vous que l'image est nette et dans un format valide.",
            "invalid_input": "Écrivez un message plus court et réessayez.",
            "general": "Réessayez ou contactez le support si le problème persiste.",
        },
    },
}


def supported_locales() -> list[str]:
    """Get the language codes that ship with a string table."""
    return sorted(_TABLES)


def _language_code(locale: str | None) -> str:
    """Reduce a locale tag like 'en_US' or 'fr-CA' to its language code."""
    if not locale:
        return DEFAULT_LOCALE
    return locale.replace("-", "_").split("_")[0].lower()


@lru_cache(maxsize=16)
def get_strings(locale: str | None = None) -> LocalizedStrings:
    """Resolve the string table for a locale tag.

    Unknown languages fall back to Spanish.

    Args:
        locale: Locale tag ('es', 'en_US', 'fr-CA', ...) or None for the default

    Returns:
        LocalizedStrings for the resolved language
    """
    code = _language_code(locale)
    if code not in _TABLES:
        code = DEFAULT_LOCALE
    return LocalizedStrings(locale=code, **_TABLES[code])


def greeting(locale: str | None = None) -> str:
    """Get the conversation greeting for a locale."""
    return get_strings(locale).greeting


__all__ = [
    "DEFAULT_LOCALE",
    "LocalizedStrings",
    "get_strings",
    "greeting",
    "supported_locales",
]
