"""Prompt template for topic-driven document generation."""

from __future__ import annotations

from typing import Any, Dict, List

DOCUMENT_SECTIONS: tuple[tuple[str, str], ...] = (
    ("Overview", "Provide a high-level overview of the main concepts"),
    ("Key Features/Components", "List and explain the main features or components"),
    (
        "Implementation/Usage",
        "If applicable, include practical examples, code snippets, or usage instructions",
    ),
    ("Best Practices", "Share recommended practices and guidelines"),
    ("Common Challenges and Solutions", "Address typical problems and their solutions"),
    ("Future Perspectives", "Discuss future trends or potential developments"),
    ("Conclusion", "Summarize key points and provide closing thoughts"),
)

_GUIDELINES: tuple[str, ...] = (
    "Use proper markdown syntax throughout",
    "Include relevant code examples if the topic is technical",
    "Use bullet points and numbered lists for better readability",
    "Add emphasis using **bold** and *italic* where appropriate",
    "Include `inline code` and code blocks where relevant",
    "Keep the content informative yet concise",
    "Maintain a professional tone throughout",
)


def document_prompt(topic: str) -> str:
    """Return the user prompt requesting a heading-structured markdown document."""

    sections = "\n\n".join(f"## {title}\n[{hint}]" for title, hint in DOCUMENT_SECTIONS)
    guidelines = "\n".join(f"{index}. {line}" for index, line in enumerate(_GUIDELINES, start=1))
    return f"""Generate a detailed and well-structured markdown document about "{topic}".

Structure the content as follows:

# {topic}

[Introduction: Write a compelling introduction that sets the context and importance of the topic]

{sections}

Important guidelines:
{guidelines}

Make the content engaging and valuable for both beginners and experienced users."""


def document_messages(topic: str) -> List[Dict[str, Any]]:
    return [{"role": "user", "content": document_prompt(topic)}]


__all__ = ["DOCUMENT_SECTIONS", "document_prompt", "document_messages"]
