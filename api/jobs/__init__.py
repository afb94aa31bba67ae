"""Jobs resource: schemas, SQL, service and routes."""
