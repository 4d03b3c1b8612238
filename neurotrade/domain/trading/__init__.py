"""
Trading bounded context - domain layer.

- Price records and the binary feature encoding fed to the models
- The predictive-model capability interface
- Threshold-band decisions (raise / fall / stable)
- Orders and prediction audit records
"""
