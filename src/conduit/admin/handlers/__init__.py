"""Admin request handlers, loaded lazily by ``conduit.admin.routes``."""
