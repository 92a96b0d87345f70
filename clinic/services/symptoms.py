"""
Rule-based symptom hints for the pharmacy counter.

Informational only.  Keywords cover English plus common Hindi
(romanised) and Punjabi (Gurmukhi) terms used in the Nabha villages.
"""
from __future__ import annotations

import re

RULES: list[tuple[re.Pattern, str]] = [
    (
        re.compile(r'fever|temperature|bukhar|bukhaar|ਬੁਖਾਰ'),
        'Possible: Viral fever. Hydration + Paracetamol 500mg if no contraindications.',
    ),
    (
        re.compile(r'cough|khansi|ਖੰਘ'),
        'Possible: Upper respiratory infection. Warm fluids, steam; see doctor if >3 days.',
    ),
    (
        re.compile(r'diarrh|loose|dast|ਦਸਤ'),
        'Possible: Gastroenteritis. ORS, zinc; watch dehydration signs.',
    ),
]

NO_MATCH = 'No clear match. Please consult a doctor.'


def suggest(symptoms: str) -> list[str]:
    text = (symptoms or '').lower()
    suggestions = [advice for pattern, advice in RULES if pattern.search(text)]
    return suggestions or [NO_MATCH]
