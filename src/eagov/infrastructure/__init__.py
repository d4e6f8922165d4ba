"""Infrastructure layer — graph storage and repository document loading."""
