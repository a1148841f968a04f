"""Upload/download boundary of the file drop."""
