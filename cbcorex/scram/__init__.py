"""SCRAM authentication client."""