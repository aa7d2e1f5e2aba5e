"""mountsim: in-memory platform simulation for archive-mounting tests."""
