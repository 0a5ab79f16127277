"""Evaluation: list dispatch, special forms, parameter binding and macro substitution."""

from sigmo.evaluation.evaluator import evaluate_list

__all__ = ["evaluate_list"]
