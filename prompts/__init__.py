"""Prompt templates for recipe and image generation."""
