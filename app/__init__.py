"""Front-end glue for hosting the CORTEX engine.

Event handlers translate player input into engine calls and CORTEX feed
messages, keeping that wiring separate from core game domain logic.
"""
