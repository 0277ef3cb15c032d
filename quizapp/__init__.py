"""Quiz service core.

Validated value types, accumulating validation, quiz grading, the
domain error taxonomy, and the repositories and services built on them.
Individual modules contain the concrete implementations and
documentation; transport (HTTP) layers consume `services` and `schemas`.
"""
