"""
Ask Annie - personal symptom tracking backend.

Stores symptom check-ins and generates post-check-in insight cards.
"""
