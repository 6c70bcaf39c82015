"""
PROPR - PRedictor of rectal Prolapse Recurrence.

Logistic-regression recurrence-risk calculator with a FastAPI front door.
"""
__version__ = "1.0.0"
