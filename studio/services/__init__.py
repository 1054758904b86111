"""Services layer for the studio console.

- validation: Draft validation pipeline and payload building
- readiness: Generation readiness of video templates
- draft: In-memory entity drafts
- submission: Validate-then-persist orchestration
"""
