"""
Compilation of declarative pack commands into runnable HTTP handlers.

Each command declared in a pack document becomes an invocable that sends
one templated HTTP request per invocation and reports the outcome as a
success or failure event.
"""
