"""
Talk2Task backend services.

    workflow/  — automation document model, validation and storage
    config/    — environment-driven settings
    logging/   — per-session logging
"""
