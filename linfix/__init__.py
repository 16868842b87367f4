"""Create a Linear issue and check out its git branch in one command."""
