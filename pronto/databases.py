"""Database types offered by Compose"""

from typing import List

from pronto.models import DatabaseChoice

DATABASES: List[DatabaseChoice] = [
    DatabaseChoice(name="MongoDB", value="mongodb"),
    DatabaseChoice(name="PostgreSQL", value="postgresql"),
    DatabaseChoice(name="Redis", value="redis"),
    DatabaseChoice(name="Elasticsearch", value="elastic_search"),
    DatabaseChoice(name="RethinkDB", value="rethink"),
    DatabaseChoice(name="RabbitMQ", value="rabbitmq"),
    DatabaseChoice(name="etcd", value="etcd"),
    DatabaseChoice(name="ScyllaDB", value="scylla"),
    DatabaseChoice(name="MySQL", value="mysql"),
    DatabaseChoice(name="JanusGraph", value="janusgraph"),
]
