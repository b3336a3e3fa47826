"""The twelve self-reflection sections every diary starts with."""

from __future__ import annotations

DEFAULT_SECTIONS = (
    {"name": "Basic information", "description": "Core facts about yourself, biography, key details", "order": 1},
    {"name": "Life story", "description": "Important events, stages, turning points", "order": 2},
    {"name": "Personality", "description": "Character, temperament, behavioural traits", "order": 3},
    {"name": "Values and beliefs", "description": "Worldview, principles, convictions", "order": 4},
    {"name": "Body and health", "description": "Physical condition, wellbeing, healthy habits", "order": 5},
    {"name": "Social life", "description": "Relationships, communication, social roles", "order": 6},
    {"name": "Interests and creativity", "description": "Hobbies, passions, creative expression", "order": 7},
    {"name": "Mind and motivation", "description": "Thinking, learning, aspirations", "order": 8},
    {"name": "Goals and dreams", "description": "Plans, ambitions, wishes", "order": 9},
    {"name": "Shadow side", "description": "Fears, weaknesses, problems", "order": 10},
    {"name": "Relationship with yourself", "description": "Self-esteem, inner dialogue, self-acceptance", "order": 11},
    {"name": "Reflection and change", "description": "Insights, conclusions, personal growth", "order": 12},
)
