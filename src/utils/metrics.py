"""
Sistema de métricas y análisis de resultados.

Este módulo proporciona funciones para analizar la congestión registrada
durante una simulación. El historial es una lista de instantáneas con la
forma ``{'time': t, 'congestion': {id_ruta: congestión}}``.
"""

from typing import Dict, List, Tuple

import numpy as np
import pandas as pd


class MetricsCalculator:
    """
    Calculadora de métricas de congestión para simulaciones de tráfico.

    Proporciona métodos estáticos para calcular diversas métricas
    a partir del historial de congestión.
    """

    @staticmethod
    def congestion_dataframe(history: List[Dict]) -> pd.DataFrame:
        """
        Convierte el historial en una serie temporal.

        Args:
            history: Historial de instantáneas de congestión

        Returns:
            pd.DataFrame: Una fila por instante (índice 'time'), una columna
            por ruta
        """
        if not history:
            return pd.DataFrame()

        df = pd.DataFrame([snapshot['congestion'] for snapshot in history],
                          index=[snapshot['time'] for snapshot in history])
        df.index.name = 'time'
        return df.reindex(sorted(df.columns), axis=1)

    @staticmethod
    def average_congestion(history: List[Dict]) -> float:
        """
        Calcula la congestión promedio sobre todas las rutas e instantes.

        Returns:
            float: Congestión promedio (0.0 si no hay datos)
        """
        values = [value for snapshot in history
                  for value in snapshot['congestion'].values()]
        return float(np.mean(values)) if values else 0.0

    @staticmethod
    def max_congestion(history: List[Dict]) -> int:
        """Retorna la congestión máxima observada en cualquier ruta."""
        values = [value for snapshot in history
                  for value in snapshot['congestion'].values()]
        return int(np.max(values)) if values else 0

    @staticmethod
    def most_congested_routes(history: List[Dict], top_n: int = 3) -> List[Tuple[str, float]]:
        """
        Retorna las rutas con mayor congestión promedio.

        Args:
            history: Historial de instantáneas de congestión
            top_n: Cantidad de rutas a retornar

        Returns:
            Lista de tuplas (id_ruta, congestión promedio), de mayor a menor
        """
        df = MetricsCalculator.congestion_dataframe(history)
        if df.empty:
            return []

        means = df.mean().sort_values(ascending=False, kind='stable')
        return [(route_id, float(value)) for route_id, value in means.head(top_n).items()]

    @staticmethod
    def create_summary_dataframe(history: List[Dict]) -> pd.DataFrame:
        """
        Crea un DataFrame con el resumen de congestión por ruta.

        Returns:
            pd.DataFrame: Columnas 'Route', 'Avg Congestion', 'Max Congestion',
            'Min Congestion', 'Std Congestion', ordenado por promedio (mayor
            primero)
        """
        df = MetricsCalculator.congestion_dataframe(history)
        if df.empty:
            return pd.DataFrame(columns=['Route', 'Avg Congestion', 'Max Congestion',
                                         'Min Congestion', 'Std Congestion'])

        summary = pd.DataFrame({
            'Route': df.columns,
            'Avg Congestion': df.mean().values,
            'Max Congestion': df.max().values,
            'Min Congestion': df.min().values,
            'Std Congestion': df.std(ddof=0).values,
        })

        return summary.sort_values('Avg Congestion', ascending=False,
                                   kind='stable').reset_index(drop=True)


if __name__ == "__main__":
    # Ejemplo de uso
    print("="*70)
    print("EJEMPLO: Calculadora de Métricas")
    print("="*70)

    history = [
        {'time': 0, 'congestion': {'X:Y': 10, 'Y:Z': 40}},
        {'time': 1, 'congestion': {'X:Y': 20, 'Y:Z': 60}},
        {'time': 2, 'congestion': {'X:Y': 30, 'Y:Z': 50}},
    ]

    calc = MetricsCalculator()

    print("\nMétricas calculadas:")
    print(f"  Congestión promedio: {calc.average_congestion(history):.2f}")
    print(f"  Congestión máxima:   {calc.max_congestion(history)}")
    print(f"  Rutas más congestionadas: {calc.most_congested_routes(history, 2)}")
    print()
    print(calc.create_summary_dataframe(history))
