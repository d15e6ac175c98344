"""Response schemas sent with each request (Gemini OpenAPI subset).

The service is asked to conform to these exactly; replies are still
validated locally against the Pydantic models before use.
"""

from __future__ import annotations

from typing import Any


def _metric_impact_schema(descriptions: bool = False) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "co2_kg": {"type": "NUMBER"},
        "water_liters": {"type": "NUMBER"},
        "waste_kg": {"type": "NUMBER"},
    }
    if descriptions:
        properties["co2_kg"]["description"] = "Estimated CO2e reduction in kg"
        properties["water_liters"]["description"] = "Estimated water conserved in liters"
        properties["waste_kg"]["description"] = "Estimated waste diverted in kg"
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": ["co2_kg", "water_liters", "waste_kg"],
    }


IMPACT_ESTIMATE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "metrics": _metric_impact_schema(descriptions=True),
        "aiAnalysis": {
            "type": "OBJECT",
            "properties": {
                "confidence_score": {
                    "type": "NUMBER",
                    "description": "0 to 100 confidence in the estimate",
                },
                "reasoning": {
                    "type": "STRING",
                    "description": "Explanation of how the numbers were derived",
                },
                "methodology": {
                    "type": "STRING",
                    "description": "The formula or standard used (e.g., EPA conversion factors)",
                },
                "sources": {
                    "type": "ARRAY",
                    "items": {"type": "STRING"},
                    "description": "Potential sources or standards cited",
                },
            },
            "required": ["confidence_score", "reasoning", "methodology", "sources"],
        },
    },
    "required": ["metrics", "aiAnalysis"],
}

SCENARIO_RESULT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "scenarioName": {"type": "STRING"},
        "projectedMetrics": _metric_impact_schema(),
        "impactChange": {
            "type": "OBJECT",
            "properties": {
                "co2_percent": {
                    "type": "NUMBER",
                    "description": "Percentage change (negative for reduction)",
                },
                "water_percent": {"type": "NUMBER"},
                "waste_percent": {"type": "NUMBER"},
            },
            "required": ["co2_percent", "water_percent", "waste_percent"],
        },
        "analysis": {
            "type": "STRING",
            "description": "Detailed analysis of the simulation",
        },
        "recommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "scenarioName",
        "projectedMetrics",
        "impactChange",
        "analysis",
        "recommendations",
    ],
}

NUDGES_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {"type": "STRING"},
}
