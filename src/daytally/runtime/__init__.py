"""Clock-driven helpers: slot grid math and reminder decisions."""
