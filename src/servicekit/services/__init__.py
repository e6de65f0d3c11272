"""Service layer — the execution contract and its result types.

Services may import from config; they must never import from output.
"""
