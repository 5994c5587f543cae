"""Offline evaluation of pre-filled records against reviewed records."""

from intake.eval.review_outcomes import OUTCOMES, compare_with_review, summarize_review_outcomes

__all__ = ["OUTCOMES", "compare_with_review", "summarize_review_outcomes"]
