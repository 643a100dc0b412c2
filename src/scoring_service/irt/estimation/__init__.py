"""
Latent trait estimation module.

This module provides maximum-likelihood estimation of a respondent's latent
trait (theta) under the 2PL model, one dichotomy at a time.

Key components:
- NewtonRaphsonConfig: Iteration limits, tolerances and theta bounds
- ThetaEstimate: Output from estimation
- estimate_theta: Newton-Raphson MLE for one set of keyed responses
"""
