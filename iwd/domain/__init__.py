"""Domain rules (record shapes, required fields) independent of storage and HTTP."""
