"""Service layer: operations over a finished Design, returning ServiceResult."""
