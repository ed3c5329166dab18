"""Canned character replies.

Used by the demo store and by the chat handler whenever no live completion
is available.
"""

import random
from typing import Optional

DEFAULT_CHARACTER_NAME = "Maya"

CANNED_RESPONSES: dict[str, tuple[str, ...]] = {
    "Maya": (
        "That's such an interesting perspective! ✨ I love how you think about things. What if we explored that idea further?",
        "Oh wow, that really sparks my creativity! 🎨 I'm getting so many ideas just from what you said!",
        "I'm absolutely fascinated by your thoughts! This opens up so many wonderful possibilities!",
        "You know what? That reminds me of something beautiful - the way ideas can bloom when we give them space to grow! 🌸",
    ),
    "Professor Sage": (
        "That raises a fascinating philosophical question. Throughout history, thinkers have grappled with similar ideas...",
        "Your observation touches upon a fundamental aspect of human experience. Consider how this relates to...",
        "An excellent point worthy of deeper contemplation. This reminds me of the ancient Greek concept of...",
        "Indeed, this connects to broader questions about the nature of knowledge and understanding...",
    ),
    "Echo": (
        "Like whispers in the wind, your words carry deeper meanings... What echoes do you hear in the silence between thoughts?",
        "In the mirror of your question, I see reflections of ancient truths... What if the answer lies not in knowing, but in being?",
        "Your thoughts are like ripples on still water, creating patterns that speak of hidden depths...",
        "Ah, you speak of things that dance at the edge of understanding... Perhaps the mystery itself is the answer?",
    ),
    "Zara": (
        "That's cutting-edge thinking! 🚀 Have you seen the latest developments in that area? The technology is evolving so fast!",
        "Absolutely mind-blowing! This could revolutionize how we approach the problem. Imagine the possibilities!",
        "You're totally on the right track! The future applications of this could be incredible!",
        "That's exactly the kind of innovative thinking we need! 💡 What other technologies could we combine with this?",
    ),
}


def responses_for(character_name: Optional[str]) -> tuple[str, ...]:
    """Return the response set for a character name, or the default set."""
    if character_name in CANNED_RESPONSES:
        return CANNED_RESPONSES[character_name]
    return CANNED_RESPONSES[DEFAULT_CHARACTER_NAME]


def canned_reply(character_name: Optional[str], rng: Optional[random.Random] = None) -> str:
    """Draw one canned reply for ``character_name`` uniformly at random."""
    rng = rng or random.Random()
    return rng.choice(responses_for(character_name))
