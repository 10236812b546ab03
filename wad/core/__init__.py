"""WAD reader core: models, errors and the reader pipeline."""
