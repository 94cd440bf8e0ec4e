"""
Implementation Planner - shared engine exceptions.
"""


class PlanValidationError(ValueError):
    """Malformed planner input or a misconfigured work-item catalog."""
