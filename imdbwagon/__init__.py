"""Download the IMDb plain text dumps and load them into a relational database."""
