"""Qt widgets binding the view model to the screen."""
