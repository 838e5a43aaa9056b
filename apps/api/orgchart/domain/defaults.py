from __future__ import annotations

"""Seed data used when no org chart state has been persisted yet."""

import copy
from typing import Any, Dict, List

AVAILABLE_TRAINING_TOPICS: List[str] = [
    "English Communication",
    "Leadership Fundamentals",
    "Time Management",
    "Customer Service Excellence",
    "Workplace Safety",
    "Microsoft Excel",
    "Project Management Basics",
    "Conflict Resolution",
    "Data Privacy Awareness",
    "Presentation Skills",
]

CUSTOM_TRAINING_TOPICS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Internal Systems Onboarding", "category": "Operations"},
    {"id": 2, "name": "Quality Policy Review", "category": "Compliance"},
]

EMPLOYEES: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "General Manager",
        "position": "General Manager",
        "department": "Management",
        "parentId": None,
        "photo": "",
        "trainings": ["Leadership Fundamentals"],
    },
    {
        "id": 2,
        "name": "Operations Manager",
        "position": "Operations Manager",
        "department": "Operations",
        "parentId": 1,
        "photo": "",
        "trainings": ["Project Management Basics"],
    },
    {
        "id": 3,
        "name": "HR Manager",
        "position": "Human Resources Manager",
        "department": "Human Resources",
        "parentId": 1,
        "photo": "",
        "trainings": ["Conflict Resolution", "Data Privacy Awareness"],
    },
    {
        "id": 4,
        "name": "Finance Manager",
        "position": "Finance Manager",
        "department": "Finance",
        "parentId": 1,
        "photo": "",
        "trainings": ["Microsoft Excel"],
    },
    {
        "id": 5,
        "name": "Shift Supervisor",
        "position": "Shift Supervisor",
        "department": "Operations",
        "parentId": 2,
        "photo": "",
        "trainings": ["Workplace Safety"],
    },
    {
        "id": 6,
        "name": "Customer Service Lead",
        "position": "Customer Service Lead",
        "department": "Operations",
        "parentId": 2,
        "photo": "",
        "trainings": ["Customer Service Excellence", "English Communication"],
    },
]


def default_state() -> Dict[str, Any]:
    """Return a fresh copy of the seed state (without a timestamp)."""
    return {
        "employees": copy.deepcopy(EMPLOYEES),
        "customTrainingTopics": copy.deepcopy(CUSTOM_TRAINING_TOPICS),
        "availableTrainingTopics": list(AVAILABLE_TRAINING_TOPICS),
    }
