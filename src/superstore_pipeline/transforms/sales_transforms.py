import apache_beam as beam
import logging


class MonthlySummaryTransform(beam.PTransform):

    """Apache Beam PTransform for summarising enriched Superstore sales.

    This transform groups enriched records by sale year, sale month and region,
    and calculates order count, total sales, total profit and profit margin
    for each group.
    """

    def expand(self, pcoll):
        return (pcoll
                | "Group By Month And Region" >> beam.GroupBy(self.summary_key)
                | "Calculate Totals" >> beam.MapTuple(self.calculate_summary))

    @staticmethod
    def summary_key(record):
        return (record.sale_year, record.sale_month, record.region)

    @staticmethod
    def calculate_summary(key, records):
        sale_year, sale_month, region = key
        records = list(records)
        total_sales = sum(record.sales for record in records)
        total_profit = sum(record.profit for record in records)
        # Enriched records always have sales > 0, so a group total is never 0
        margin = round(total_profit / total_sales, 4) if total_sales else 0.0

        logging.info(f"Summarised {len(records)} orders for {region} {sale_year}-{sale_month:02d}")
        return {
            'sale_year': sale_year,
            'sale_month': sale_month,
            'region': region,
            'order_count': len(records),
            'total_sales': round(total_sales, 2),
            'total_profit': round(total_profit, 2),
            'profit_margin': margin
        }
