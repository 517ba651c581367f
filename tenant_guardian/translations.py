"""
translations.py - UI strings per language

Only the strings the service itself surfaces (errors, chat greeting,
tier labels) live here; everything else is rendered by the front end.
"""

from typing import Dict

from tenant_guardian.schemas import Language


TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.ENGLISH: {
        "title": "Tenant Guardian",
        "subtitle": "AI rental scam detector",
        "analysis_error": "Failed to analyze listing. The AI service may be temporarily unavailable or the input was invalid.",
        "document_error": "Document verification failed. Please try again with a clear image.",
        "chat_welcome": "Hi! I'm your Tenant Guardian assistant. Ask me about rental laws, red flags or safe renting.",
        "chat_error": "Sorry, I encountered an error. Please try again.",
        "tier_high": "High risk",
        "tier_caution": "Caution",
        "tier_safe": "Safe",
        "login_invalid": "Invalid credentials provided.",
    },
    Language.HINDI: {
        "title": "टेनेंट गार्जियन",
        "subtitle": "एआई किराया धोखाधड़ी पहचानकर्ता",
        "analysis_error": "लिस्टिंग का विश्लेषण नहीं हो सका। एआई सेवा अस्थायी रूप से अनुपलब्ध हो सकती है या इनपुट अमान्य था।",
        "document_error": "दस्तावेज़ सत्यापन विफल रहा। कृपया स्पष्ट छवि के साथ फिर से प्रयास करें।",
        "chat_welcome": "नमस्ते! मैं आपका टेनेंट गार्जियन सहायक हूँ। किराया कानून, खतरे के संकेत या सुरक्षित किराये के बारे में पूछें।",
        "chat_error": "क्षमा करें, एक त्रुटि हुई। कृपया फिर से प्रयास करें।",
        "tier_high": "उच्च जोखिम",
        "tier_caution": "सावधानी",
        "tier_safe": "सुरक्षित",
        "login_invalid": "अमान्य क्रेडेंशियल।",
    },
    Language.FRENCH: {
        "title": "Tenant Guardian",
        "subtitle": "Détecteur d'arnaques locatives par IA",
        "analysis_error": "Impossible d'analyser l'annonce. Le service d'IA est peut-être indisponible ou la saisie était invalide.",
        "document_error": "La vérification du document a échoué. Réessayez avec une image nette.",
        "chat_welcome": "Bonjour ! Je suis l'assistant Tenant Guardian. Posez-moi vos questions sur le droit locatif, les signaux d'alerte ou la location en toute sécurité.",
        "chat_error": "Désolé, une erreur s'est produite. Veuillez réessayer.",
        "tier_high": "Risque élevé",
        "tier_caution": "Prudence",
        "tier_safe": "Sûr",
        "login_invalid": "Identifiants invalides.",
    },
    Language.SPANISH: {
        "title": "Tenant Guardian",
        "subtitle": "Detector de estafas de alquiler con IA",
        "analysis_error": "No se pudo analizar el anuncio. El servicio de IA puede no estar disponible o los datos no eran válidos.",
        "document_error": "La verificación del documento falló. Inténtalo de nuevo con una imagen clara.",
        "chat_welcome": "¡Hola! Soy el asistente de Tenant Guardian. Pregúntame sobre leyes de alquiler, señales de alerta o cómo alquilar con seguridad.",
        "chat_error": "Lo siento, ocurrió un error. Inténtalo de nuevo.",
        "tier_high": "Riesgo alto",
        "tier_caution": "Precaución",
        "tier_safe": "Seguro",
        "login_invalid": "Credenciales no válidas.",
    },
}


def translate(key: str, language: Language = Language.ENGLISH) -> str:
    """Look up a UI string, falling back to English, then to the key itself."""
    strings = TRANSLATIONS.get(language, TRANSLATIONS[Language.ENGLISH])
    return strings.get(key) or TRANSLATIONS[Language.ENGLISH].get(key, key)
