"""
Engine Doctrine

Engines are the pure-logic layer of the cross-validation run.

- Engines never talk to the platform.
- Engines turn inputs into request bodies or decisions
  (fold plans, pairing, predictor kind, evaluation names).
- Adapters execute what engines plan; steps decide when.

Everything here is deterministic and testable without a platform.
"""
