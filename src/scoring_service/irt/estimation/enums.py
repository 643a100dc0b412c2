from enum import Enum


class ConvergenceStatus(str, Enum):
    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"
    FLAT_LIKELIHOOD = "flat_likelihood"
    NO_RESPONSES = "no_responses"
