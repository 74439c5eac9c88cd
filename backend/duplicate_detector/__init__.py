"""Top-level package for the receipt duplicate detector.

The package is split into a pure detection core and a thin FastAPI
host. ``services.normalization`` canonicalises amounts, dates and store
names, ``services.matching`` combines them into the pairwise duplicate
predicate, and ``services.duplicate_service`` groups a batch or looks up
a single receipt. ``api`` exposes those operations over HTTP.

To run the API locally you can execute:

```bash
uvicorn duplicate_detector.api.main:app --reload --port 5004
```

Configuration values are read from environment variables or a ``.env``
file at the project root (see ``core.config``).
"""

__all__: list[str] = []
