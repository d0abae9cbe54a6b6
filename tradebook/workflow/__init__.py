"""tradebook.workflow -- Temporal activities, workflows and worker wiring."""
