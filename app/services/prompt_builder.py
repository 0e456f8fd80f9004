"""
Детерминированная сборка текстового промпта из подготовленного контекста.
Секции выводятся только при непустом источнике и всегда в одном порядке.
"""
from typing import List

from app.schemas.context import AugmentedContext, ConversationRecord, TaskRecord
from app.utils.prompt_manager import PromptManager, prompt_manager as default_prompt_manager


HIGH_PRIORITY_LIMIT = 3
ACTIVITY_LIMIT = 3
DUE_DATE_FORMAT = "%b %d, %Y"


def _section(title: str, lines: List[str]) -> str:
    return "\n".join([f"{title}:"] + lines)


def _overdue_lines(tasks: List[TaskRecord]) -> List[str]:
    return [f"- {t.title} (due {t.due_at.strftime(DUE_DATE_FORMAT)})" for t in tasks]


def _today_lines(tasks: List[TaskRecord]) -> List[str]:
    return [f"- {t.title} [{t.priority.value}]" for t in tasks]


def _title_lines(tasks: List[TaskRecord]) -> List[str]:
    return [f"- {t.title}" for t in tasks]


def _history_lines(history: List[ConversationRecord]) -> List[str]:
    lines = []
    for turn in history:
        lines.append(f"User: {turn.message}")
        lines.append(f"Assistant: {turn.response}")
    return lines


def build_prompt(message: str, context: AugmentedContext, prompts: PromptManager = None) -> str:
    """
    Собирает промпт для генерации ответа.

    Порядок секций: заголовок, просроченные задачи, задачи на сегодня
    (или, если их нет, ближайшие), важные задачи, недавняя активность,
    история диалога, текущее сообщение, инструкции.
    """
    prompts = prompts or default_prompt_manager
    stats = context.task_stats
    lists = context.lists

    sections = [
        prompts.render(
            "chat_header",
            user_name=context.user_name,
            streak=context.streak,
            completed=stats.completed,
            total=stats.total,
            pending=stats.pending,
            completion_rate=stats.completion_rate,
        )
    ]

    if lists.overdue:
        sections.append(_section("OVERDUE TASKS", _overdue_lines(lists.overdue)))

    if lists.today:
        sections.append(_section("TODAY'S TASKS", _today_lines(lists.today)))
    elif lists.upcoming:
        sections.append(_section("UPCOMING TASKS", _title_lines(lists.upcoming)))

    if lists.high_priority:
        sections.append(_section("HIGH PRIORITY", _title_lines(lists.high_priority[:HIGH_PRIORITY_LIMIT])))

    if context.recent_activity:
        sections.append(_section("RECENT ACTIVITY", [f"- {a}" for a in context.recent_activity[:ACTIVITY_LIMIT]]))

    if context.history:
        sections.append(_section("RECENT CONVERSATION", _history_lines(context.history)))

    sections.append(f"USER MESSAGE: {message}")
    sections.append(prompts.render("chat_instructions"))

    return "\n\n".join(sections)
