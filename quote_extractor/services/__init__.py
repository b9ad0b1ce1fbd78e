"""Services: engine entry points, quote assembly and batch runs."""
