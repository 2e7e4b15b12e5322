"""mage: link dotfiles from a Git repository into your home directory."""

__version__ = "0.1.0"
