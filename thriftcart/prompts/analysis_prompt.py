ANALYSIS_SYSTEM = """You are an expert in comparing {domain_label} across Indian platforms.
Provide detailed, structured responses in JSON format only. Do not add prose outside the JSON."""

# Dimensions scored per domain; callers may pass their own mapping.
DEFAULT_RUBRICS = {
    "delivery": [
        "Delivery speed and reliability",
        "Cost-effectiveness and value for money",
        "Service quality and customer satisfaction",
        "Health and safety standards",
        "Environmental impact and sustainability",
    ],
    "ride": [
        "Fare compared to typical pricing for the distance",
        "Travel time for the distance",
        "Pickup wait time",
        "Comfort and suitability of the vehicle type",
        "Reliability of the platform",
    ],
    "ecommerce": [
        "Price value and discount",
        "Product quality and customer ratings",
        "Availability and delivery time",
        "Brand reliability",
        "Sustainability of materials",
    ],
}

DOMAIN_LABELS = {
    "delivery": "quick-commerce delivery services",
    "ride": "ride-hailing options",
    "ecommerce": "e-commerce product listings",
}

ANALYSIS_USER_TEMPLATE = """Analyze the following {domain_label} listing and score it on each dimension below.

{record_block}

Dimensions:
{rubric}

Format your response as a JSON object with this exact structure:
{{
  "overallSentiment": "positive|neutral|negative",
  "overallScore": 0-100,
  "summary": "Short summary of the listing",
  "recommendation": "Highly Recommended|Recommended|Not Recommended",
  "features": [
    {{
      "name": "Dimension name",
      "description": "What was assessed",
      "sentiment": "positive|neutral|negative",
      "score": 0-100,
      "explanation": "Why this score"
    }}
  ],
  "pros": ["Pro 1", "Pro 2"],
  "cons": ["Con 1", "Con 2"],
  "bestFor": "Ideal use cases",
  "alternatives": [{{"name": "Alternative", "reason": "Why consider it"}}]
}}
"""
