"""
Result model public surface.

This module re-exports the one-concern-per-file implementations under
``responses_client.base.models_parts``; callers import from here.
"""

from .models_parts.content_part import ContentPart, OutputText, UnknownContentPart
from .models_parts.output_item import MessageOutput, OutputItem, ReasoningOutput, UnknownOutputItem
from .models_parts.response import Response, ResponseStatus
from .models_parts.summary_part import SummaryPart, SummaryText, UnknownSummaryPart
from .models_parts.usage import Usage, validate_usage
from .models_parts.views import first_message_text, output_text

__all__ = [
    "ContentPart",
    "OutputText",
    "UnknownContentPart",
    "OutputItem",
    "MessageOutput",
    "ReasoningOutput",
    "UnknownOutputItem",
    "Response",
    "ResponseStatus",
    "SummaryPart",
    "SummaryText",
    "UnknownSummaryPart",
    "Usage",
    "validate_usage",
    "first_message_text",
    "output_text",
]
