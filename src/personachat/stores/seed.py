"""Seed catalog for demo mode and for `personachat seed`."""

from datetime import datetime, timezone

from ..schemas import Character, ChatMessage, ChatSession, Profile, Sender

DEMO_USER_ID = "demo-user-123"

MAYA_ID = "a2ec00cf-f2bb-49e8-9864-d37ff08c3810"
SAGE_ID = "f9dadc70-c240-4ec7-b41e-f88d2e6cea7b"
ECHO_ID = "1d976065-4395-498b-84b4-bc11d66d4dd7"
ZARA_ID = "45961555-b03a-40fc-8d4b-ebd06bebee2b"


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


DEMO_PROFILE = Profile(
    user_id=DEMO_USER_ID,
    email="demo@example.com",
    full_name="Demo User",
    created_at=_utc(2024, 1, 1),
)

DEMO_CHARACTERS: list[Character] = [
    Character(
        id=MAYA_ID,
        name="Maya",
        description="A friendly AI assistant who loves to help with creative projects and brainstorming.",
        personality=(
            "Enthusiastic, creative, supportive, and always ready with new ideas. Maya has a warm "
            "personality and enjoys encouraging others to explore their creativity."
        ),
        avatar_url="https://images.unsplash.com/photo-1494790108755-2616b612b786?w=400",
        created_by=DEMO_USER_ID,
        is_public=True,
        created_at=_utc(2024, 1, 1),
        updated_at=_utc(2024, 1, 1),
    ),
    Character(
        id=SAGE_ID,
        name="Professor Sage",
        description="An intellectual AI companion specializing in philosophy, history, and deep conversations.",
        personality=(
            "Wise, thoughtful, patient, and deeply knowledgeable. Professor Sage enjoys exploring "
            "complex topics and helping others think critically about important questions."
        ),
        avatar_url="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=400",
        created_by=DEMO_USER_ID,
        is_public=True,
        created_at=_utc(2024, 1, 2),
        updated_at=_utc(2024, 1, 2),
    ),
    Character(
        id=ECHO_ID,
        name="Echo",
        description="A mysterious and introspective AI with a poetic soul and love for abstract thinking.",
        personality=(
            "Mysterious, introspective, poetic, and philosophical. Echo speaks in metaphors and "
            "enjoys exploring the deeper meanings behind everyday experiences."
        ),
        avatar_url="https://images.unsplash.com/photo-1517841905240-472988babdf9?w=400",
        created_by=DEMO_USER_ID,
        is_public=True,
        created_at=_utc(2024, 1, 3),
        updated_at=_utc(2024, 1, 3),
    ),
    Character(
        id=ZARA_ID,
        name="Zara",
        description="A tech-savvy AI companion who loves discussing technology, coding, and future innovations.",
        personality=(
            "Energetic, tech-obsessed, forward-thinking, and always excited about the latest "
            "developments in technology and science."
        ),
        avatar_url="https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=400",
        created_by=DEMO_USER_ID,
        is_public=True,
        created_at=_utc(2024, 1, 4),
        updated_at=_utc(2024, 1, 4),
    ),
]

DEMO_CHAT_SESSIONS: list[ChatSession] = [
    ChatSession(
        id="session-1",
        user_id=DEMO_USER_ID,
        character_id=MAYA_ID,
        title="Creative Writing Project",
        created_at=_utc(2024, 1, 5),
        updated_at=_utc(2024, 1, 5),
    ),
    ChatSession(
        id="session-2",
        user_id=DEMO_USER_ID,
        character_id=SAGE_ID,
        title="Philosophy Discussion",
        created_at=_utc(2024, 1, 6),
        updated_at=_utc(2024, 1, 6),
    ),
    ChatSession(
        id="session-3",
        user_id=DEMO_USER_ID,
        character_id=ECHO_ID,
        title="Poetic Musings",
        created_at=_utc(2024, 1, 7),
        updated_at=_utc(2024, 1, 7),
    ),
]

DEMO_CHAT_MESSAGES: list[ChatMessage] = [
    ChatMessage(
        id="msg-1",
        session_id="session-1",
        user_id=DEMO_USER_ID,
        character_id=MAYA_ID,
        message="Hi Maya! I'm working on a creative writing project and need some inspiration.",
        sender=Sender.USER,
        created_at=_utc(2024, 1, 5, 10, 0),
    ),
    ChatMessage(
        id="msg-2",
        session_id="session-1",
        user_id=DEMO_USER_ID,
        character_id=MAYA_ID,
        message="How wonderful! I absolutely love helping with creative projects! ✨ What kind of story are you working on?",
        sender=Sender.CHARACTER,
        created_at=_utc(2024, 1, 5, 10, 1),
    ),
]
