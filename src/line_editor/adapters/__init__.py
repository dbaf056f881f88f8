"""Hosts that drive an editor session: console and Textual."""
