"""Offline completion client.

Returns a fixed, well-formed analysis reply without any network calls. Handy for
local development and as a template for new provider adapters: implement
BaseCompletionClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from app.analysis.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "confidence": 75,
        "possibleConditions": [
            {
                "name": "Tension headache",
                "probability": 60,
                "description": "Band-like pressure often linked to stress or poor sleep",
                "severity": "low",
            },
            {
                "name": "Migraine",
                "probability": 30,
                "description": "Recurrent throbbing headache, sometimes with nausea",
                "severity": "medium",
            },
        ],
        "recommendations": [
            {
                "type": "lifestyle",
                "title": "Rest and hydration",
                "description": "Rest in a quiet room and drink plenty of water",
                "urgency": "low",
            },
            {
                "type": "medical",
                "title": "See a doctor if it persists",
                "description": "Book an appointment if symptoms last more than a week",
                "urgency": "medium",
            },
        ],
        "medications": [
            {
                "name": "Paracetamol",
                "type": "OTC",
                "dosage": "500mg",
                "frequency": "Every 6 hours as needed",
                "duration": "Up to 3 days",
                "sideEffects": ["Nausea", "Rash"],
                "price": "$5-10",
            }
        ],
        "redFlags": ["Sudden, severe headache", "Headache with stiff neck and fever"],
    }

    def generate(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
