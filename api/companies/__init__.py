"""Companies resource: schemas, SQL, service and routes."""
