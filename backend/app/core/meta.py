"""
Batch-wide meta flags derived from the filtered messages.
"""
from __future__ import annotations

from typing import Sequence

from app.models import Message, MetaFlags
from app.utils import fold_text, has_operator_marker

DISCLOSURE_PHRASE = "teste tecnico mbras"
SIGNATURE_LENGTH = 42


def is_operator_message(message: Message) -> bool:
    return has_operator_marker(message.author_id)


def is_disclosure_message(message: Message) -> bool:
    return DISCLOSURE_PHRASE in fold_text(message.content)


def is_signature_message(message: Message) -> bool:
    # len() counts codepoints, not UTF-16 units
    return len(message.content) == SIGNATURE_LENGTH and has_operator_marker(message.content)


def infer_meta_flags(messages: Sequence[Message]) -> MetaFlags:
    """Each flag is set when any message in the batch satisfies its predicate."""
    return MetaFlags(
        operator_presence=any(is_operator_message(m) for m in messages),
        disclosure_awareness=any(is_disclosure_message(m) for m in messages),
        signature_pattern=any(is_signature_message(m) for m in messages),
    )
