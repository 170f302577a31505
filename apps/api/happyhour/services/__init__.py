"""Business logic: auth, bars and their edit sessions, PDF menus."""
