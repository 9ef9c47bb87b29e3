"""HT6 hackathon backend."""
