"""Terminal output for plugins: basic and non-interactive UIs, statuses, step groups and tables."""