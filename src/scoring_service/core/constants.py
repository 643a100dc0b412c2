"""
Constants shared by the item table, the estimator and the preference resolver.
"""

# Theta is reported on [-THETA_LIMIT, THETA_LIMIT]
THETA_LIMIT = 3.0

# Preference Clarity Index scale
PCI_MAX = 30
PCI_MIN = 1

# Lower PCI bound of each clarity category
PCI_VERY_CLEAR = 26
PCI_CLEAR = 16
PCI_MODERATE = 6

# Reported theta precision (decimal places)
THETA_DECIMALS = 2

# Host answer sets are keyed by 1-based item number; items are 0-based internally
ITEM_NUMBER_OFFSET = 1

# Positive pole (E, S, T, J) and negative pole (I, N, F, P) score keys
POSITIVE_POLE = 1
NEGATIVE_POLE = 0

# Answer-string encoding used by CSV batch files
MISSING_CHAR = "*"

# Top-level key of the question catalogue JSON document
CATALOGUE_ROOT_KEY = "MBTI_Form_M"

# Name under which the project is distributed and declared in pyproject.toml
DISTRIBUTION_NAME = "preference-scoring"
