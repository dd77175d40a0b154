"""Prompt construction for conversation-guide generation."""

from __future__ import annotations

from neta.models.neta import RawItem

NO_DESCRIPTION_PLACEHOLDER = "No description available"

GUIDE_SYSTEM_PROMPT = (
    "You help Japanese people who speak English talk about Japanese news with "
    "visitors and friends from abroad. You respond with a single JSON object and "
    "nothing else: no markdown, no code fences, no commentary."
)

# Field names and types the response must contain. ResponseParser reads exactly these keys.
GUIDE_RESPONSE_SCHEMA = """{
  "category": "string - one of: culture, season, food, society, manners, transport, travel, business, technology, sports",
  "difficultyLevel": "integer - 1 (easy small talk), 2 (some background needed) or 3 (nuanced topic)",
  "casualPhrases": ["string - 2-3 casual English sentences to bring up the topic"],
  "expandingQuestions": ["string - 2 questions that keep the conversation going"],
  "thirtySecondExplanation": "string - explanation in Japanese that takes about 30 seconds to say",
  "whyExplanation": "string - longer explanation in Japanese answering 'why?' follow-ups",
  "foreignerAnalogies": [{"country": "string", "analogy": "string - comparable thing in that country"}],
  "talkingHooks": ["string - 3 surprising bits of trivia"],
  "numberFacts": ["string - 3 facts built around a number"],
  "practicalQA": [{"question": "string", "answer": "string"}],
  "culturalQA": [{"question": "string", "answer": "string"}],
  "deepDiveQA": [{"question": "string", "answer": "string"}],
  "relatedAreas": ["string - related sightseeing spots or areas in Japan"]
}"""

GUIDE_PROMPT_TEMPLATE = """Given this news article, create a conversation guide.

Article Title: {title}
Description: {description}
Source Categories: {tags}

Guidelines:
- Write phrases, questions and Q&A answers in natural, simple English.
- Write thirtySecondExplanation and whyExplanation in Japanese.
- practicalQA: 3 items, culturalQA: 3 items, deepDiveQA: 2 items.
- foreignerAnalogies: 2-3 countries.

Respond in JSON format only, using exactly these fields:
{schema}"""


def build_guide_prompt(item: RawItem) -> str:
    """Render the user prompt for one item.

    Pure: the same item always produces byte-identical text.
    """
    description = item.snippet.strip() or NO_DESCRIPTION_PLACEHOLDER
    tags = ", ".join(item.source_category_tags) if item.source_category_tags else "none"
    return GUIDE_PROMPT_TEMPLATE.format(
        title=item.title.strip(),
        description=description,
        tags=tags,
        schema=GUIDE_RESPONSE_SCHEMA,
    )
