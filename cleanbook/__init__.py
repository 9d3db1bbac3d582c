"""Availability, pricing, and submission engine for the cleaning booking forms."""
