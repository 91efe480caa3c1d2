from __future__ import annotations

import re

from appforge.tasks.base import Task

CACHE_STORE = (
    "  config.cache_store = :mem_cache_store,\n"
    "    (ENV['MEMCACHIER_SERVERS'] || ENV['MEMCACHE_SERVERS'] || 'localhost:11211').split(','),\n"
    "    { username: ENV['MEMCACHIER_USERNAME'], password: ENV['MEMCACHIER_PASSWORD'],\n"
    "      failover: true, socket_timeout: 1.5, socket_failure_delay: 0.2, pool_size: 5 }"
)


class AddMemcachedSupport(Task):
    @property
    def summary(self) -> str:
        return "Use memcached (dalli) as the production cache store"

    def before_bundle(self) -> None:
        self.add_gem("dalli")
        self.add_gem("connection_pool")

    def after_bundle(self) -> None:
        self.replace(
            "config/environments/production.rb",
            re.compile(r"^[ \t]*#[ \t]*config\.cache_store = :mem_cache_store$", re.MULTILINE),
            lambda _m: CACHE_STORE,
            count=1,
        )
