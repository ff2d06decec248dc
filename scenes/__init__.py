"""scenes — Game screens pushed onto the App's scene stack."""
