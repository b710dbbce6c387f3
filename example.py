"""Example usage of the sqldump_tsv library."""

import io
from pathlib import Path

from sqldump_tsv import StatementSource, convert

# A tiny dump in the shape mysqldump produces
dump = b"""
DROP TABLE IF EXISTS `Persons`;
CREATE TABLE `Persons` (
  `id` int(11) NOT NULL,
  `name` varchar(80) NOT NULL DEFAULT '',
  `balance` decimal(10,2) DEFAULT NULL,
  PRIMARY KEY (`id`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;

LOCK TABLES `Persons` WRITE;
INSERT INTO `Persons` VALUES (1,'Alice',12.50),(2,'Bob\\tby tab',-3.00),(3,'Carol',NULL);
UNLOCK TABLES;
"""

# Write the converted tables here
output_dir = Path("./example_tables")

summary = convert(StatementSource(io.BytesIO(dump)), output_dir)

for table, rows in summary.tables.items():
    print(f"{table}: {rows} rows -> {summary.path_for(table)}")
    print(summary.path_for(table).read_text(encoding="utf-8"))
