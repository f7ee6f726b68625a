"""
Core arbitrary-precision math, domain models, and boundary contracts.

This module contains the foundational building blocks that are independent
of the expression language (tokenizer, parser, evaluator).
"""
