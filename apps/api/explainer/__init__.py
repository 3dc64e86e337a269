"""Explainer API: structured, mode-aware explanations backed by an LLM."""
