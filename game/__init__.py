"""Core game domain package for the CORTEX case.

- Case content and the validated catalog (`case_data`, `catalog`)
- Progress state and the operations that change it (`state`, `engine`)
- Dialogue cursor resolution (`dialogue`) and accusation scoring (`evaluator`)
"""
