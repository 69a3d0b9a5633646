"""kctrust: certificate trust management for the macOS login keychain."""
