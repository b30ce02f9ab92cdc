"""Market dashboard with onboarding hint orchestration."""
