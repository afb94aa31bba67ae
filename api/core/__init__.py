"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, SQL fragment builders, errors, settings, logging). Keep
resource-specific SQL and business logic in the corresponding feature
package (e.g. `companies/`).
"""
