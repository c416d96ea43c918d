"""
Mutation engine and the batched-mutation envelope it runs every operation in.
"""

from requesttree.mutation.batch import MutationBatch, mutation_batch
from requesttree.mutation.engine import MutationEngine

__all__ = [
    "MutationEngine",
    "MutationBatch",
    "mutation_batch",
]
