"""tradebook -- derivative trade validation and booking engine."""
