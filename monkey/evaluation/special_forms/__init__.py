"""Registry of special forms for the Monkey evaluator.

Maps callee names to handlers that receive their arguments as *unevaluated*
syntax. The evaluator consults this table before ordinary function
application whenever a call's callee is a bare identifier.
"""

from monkey.evaluation.special_forms.quote_forms import quote_form, unquote_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "unquote": unquote_form,
}
