"""Idea discovery and deep-dive analysis prompts."""

from __future__ import annotations
from textwrap import dedent

from ..models import BusinessIdea

IDEA_COUNT = 5


def discovery_instruction(*, location_query: str) -> str:
    return dedent(
        f"""
        Based on a detailed analysis of the location "{location_query}", generate {IDEA_COUNT} innovative and viable business ideas for young entrepreneurs. Consider local demographics, existing businesses, and potential unmet needs in that specific area.
        Your response MUST be a single, valid JSON array of objects. Do not include any text, explanations, or markdown formatting like ```json before or after the JSON array. The JSON must be parseable.
        Each object in the array must have the following keys:
        - "name": A string for the business name.
        - "concept": A string for the one-sentence concept.
        - "startupCost": A string with one of these exact values: 'Low', 'Medium', or 'High'.

        Here is an example of the required format:
        [
          {{
            "name": "Example Name",
            "concept": "Example one-sentence concept.",
            "startupCost": "Medium"
          }}
        ]

        Ensure all string values are properly quoted and all objects in the array are separated by commas.
        """
    ).strip()


def analysis_instruction(*, idea: BusinessIdea) -> str:
    return dedent(
        f"""
        Perform a deep, comprehensive analysis of the following business idea for a young entrepreneur:
        Name: {idea.name}
        Concept: {idea.concept}
        Estimated Startup Cost: {idea.startup_cost}

        Provide the following in well-structured markdown, using '## ' for section headings,
        '### ' for sub-headings and '* ' for bullet points:
        1. **SWOT Analysis:** Strengths, Weaknesses, Opportunities, and Threats.
        2. **Target Audience:** A detailed description of the ideal customer.
        3. **Marketing & Branding Strategy:** Creative and low-cost marketing ideas suitable for a new venture.
        4. **Initial 3-Step Action Plan:** The first three concrete steps to get started.
        """
    ).strip()
