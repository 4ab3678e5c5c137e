# Dashboard Module
# 
# Product performance analytics: metric calculators, aggregation, trends and
# insights over the daily records of each product, served through the
# /api/products blueprint.
