"""SchoolDesk - multi-tenant school management backend."""
