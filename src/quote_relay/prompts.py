from string import Template

from quote_relay.text.language import Language

QUOTE_PROMPT = Template(
    """A user is feeling or thinking about: "$topic".
Generate an extremely short, impactful phrase $language_instruction (ideally 5-15 words in the target language).
It should hit like a memorable movie line or a resonant song lyric.
Make it easy to understand, potent, and highly quotable in the specified language.
Offer a flash of insight, comfort, or a powerful perspective.
No fluff, no explanation. Just the core line. Direct, clear, and strong.
Think of something that sticks.
DO NOT include any introductory phrases or your own quotation marks."""
)


def normalize_topic(topic: str) -> str:
    """Collapse whitespace and keep the topic from closing its quoted slot."""
    return " ".join(topic.split()).replace('"', "'")


def build_prompt(topic: str, language: Language) -> str:
    return QUOTE_PROMPT.substitute(
        topic=normalize_topic(topic),
        language_instruction=language.instruction,
    )
