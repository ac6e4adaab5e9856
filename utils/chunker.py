def chunk_text(text, size=500, overlap=50):
    """Split text into fixed-size windows, each starting `size - overlap` chars after the last."""
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    if overlap < 0 or overlap >= size:
        raise ValueError(f"overlap must be in [0, {size}), got {overlap}")

    chunks = []
    start = 0
    while start < len(text):
        end = start + size
        chunk = text[start:end]
        chunks.append(chunk)
        start += size - overlap
    return chunks
