# Lets pytest import expense_tracker from a plain checkout.
