"""Localised strings for prompts, score messages, and report labels.

Unknown languages and unknown keys fall back to English so a partially
translated catalogue never breaks a session.

Examples
--------
>>> from learning_guides.texts import text
>>> text("es", "definition_prompt", name="Flexbox")
'¿Qué es Flexbox?'
>>> text("fr", "definition_prompt", name="Flexbox")
'What is Flexbox?'
"""

from __future__ import annotations

TEXTS: dict[str, dict[str, str]] = {
    "en": {
        "definition_prompt": "What is {name}?",
        "comparison_prompt": "How does {name} compare to other concepts?",
        "definition": "Definition",
        "comparison": "Comparison",
        "question": "Question:",
        "answer": "Answer:",
        "reveal": "Press Enter to reveal the answer",
        "did_you_know": "Did you know it? [y/n]",
        "select_answer": "Select the correct answer:",
        "correct": "Correct!",
        "incorrect": "Incorrect",
        "correct_answer": "The correct answer was:",
        "card": "Card",
        "of": "of",
        "score": "Score",
        "accuracy": "Accuracy",
        "excellent": "Excellent work!",
        "good": "Good job!",
        "practice": "Keep practicing!",
        "session_complete": "Session Complete!",
        "overall_score": "Overall Score",
        "questions": "questions",
        "topic_breakdown": "Topic Breakdown",
        "strong_areas": "Strong Areas",
        "areas_to_improve": "Areas to Improve",
        "recommendations": "Recommendations",
        "reviewed": "Reviewed Questions",
        "focus": "Focus more on: {topics}",
        "praise": "Great job with: {topics}",
        "no_items": "No questions could be generated for this selection.",
        "estimated_time": "Estimated time: ~{minutes} min",
    },
    "es": {
        "definition_prompt": "¿Qué es {name}?",
        "comparison_prompt": "¿Cómo se compara {name} con otros conceptos?",
        "definition": "Definición",
        "comparison": "Comparación",
        "question": "Pregunta:",
        "answer": "Respuesta:",
        "reveal": "Pulsa Enter para mostrar la respuesta",
        "did_you_know": "¿Lo sabías? [s/n]",
        "select_answer": "Selecciona la respuesta correcta:",
        "correct": "¡Correcto!",
        "incorrect": "Incorrecto",
        "correct_answer": "La respuesta correcta era:",
        "card": "Tarjeta",
        "of": "de",
        "score": "Puntuación",
        "accuracy": "Precisión",
        "excellent": "¡Excelente trabajo!",
        "good": "¡Buen trabajo!",
        "practice": "¡Sigue practicando!",
        "session_complete": "¡Sesión Completa!",
        "overall_score": "Puntuación General",
        "questions": "preguntas",
        "topic_breakdown": "Desglose por Tema",
        "strong_areas": "Áreas Fuertes",
        "areas_to_improve": "Áreas a Mejorar",
        "recommendations": "Recomendaciones",
        "reviewed": "Preguntas Revisadas",
        "focus": "Enfócate más en: {topics}",
        "praise": "Gran trabajo con: {topics}",
        "no_items": "No se pudieron generar preguntas para esta selección.",
        "estimated_time": "Tiempo estimado: ~{minutes} min",
    },
}

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes", "s", "si", "sí"})


def text(language: str, key: str, **params: object) -> str:
    """Return the string for ``key`` in ``language`` with ``params`` applied."""
    catalogue = TEXTS.get(language, TEXTS["en"])
    template = catalogue.get(key, TEXTS["en"][key])
    return template.format(**params) if params else template


def labels(language: str) -> dict[str, str]:
    """Return the full catalogue for ``language`` merged over English."""
    return {**TEXTS["en"], **TEXTS.get(language, {})}


__all__ = ["AFFIRMATIVE_ANSWERS", "TEXTS", "labels", "text"]
