"""Form control core for a job application form.

The package provides the parts of the form that do not depend on rendering:
- A state container for field values, including the nested skills group
- A rule-table validation engine with position-dependent rules
- A submission state machine that fires a success callback exactly once per
  clean submit attempt
- An event stream for the rendering layer and for auditing

Basic usage:
    >>> from jobform import FormState, SubmissionController
    >>> form = FormState()
    >>> controller = SubmissionController(on_submit_success=print, form=form)
    >>> form.update("fullName", "Ada Lovelace")["fullName"]
    'Ada Lovelace'
    >>> controller.attempt().clean
    False
    >>> form.errors["email"]
    'Email is required'
"""

__version__ = "0.1.0"
__author__ = "Jobform Team"

# Version info
VERSION = (0, 1, 0)

# Core exports
from jobform.errors import FormContractError, UnknownFieldPathError
from jobform.form_state import FormState
from jobform.paths import FieldPathResolver
from jobform.state_machine import SubmissionController
from jobform.validation import ValidationEngine, validate

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "FieldPathResolver",
    "FormContractError",
    "FormState",
    "SubmissionController",
    "UnknownFieldPathError",
    "ValidationEngine",
    "validate",
]
