"""
Fixed UI strings shown around a rendered form (buttons, summary heading, notices).

Only English and Spanish ship; any other locale falls back to English.
"""

from __future__ import annotations

from typing import Dict

CHROME: Dict[str, Dict[str, str]] = {
    "en": {
        "previous": "Previous",
        "next": "Next",
        "cancel": "Cancel",
        "summaryTitle": "Response Summary",
        "summaryDescription": "Review your answers before submitting the form.",
        "previewNotice": "This is a preview only. Form submission is disabled.",
        "emptyState": "No fields added yet. Add fields to see the preview.",
        "untitledForm": "Form Preview",
    },
    "es": {
        "previous": "Anterior",
        "next": "Siguiente",
        "cancel": "Cancelar",
        "summaryTitle": "Resumen de respuestas",
        "summaryDescription": "Revise sus respuestas antes de enviar el formulario.",
        "previewNotice": "This is a preview only. Form submission is disabled.",
        "emptyState": "No fields added yet. Add fields to see the preview.",
        "untitledForm": "Form Preview",
    },
}


def chrome_strings(locale: str) -> Dict[str, str]:
    return dict(CHROME.get(locale) or CHROME["en"])
