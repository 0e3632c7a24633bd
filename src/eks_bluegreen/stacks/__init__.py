"""
eks_bluegreen.stacks

CDK stacks (deployment units) of the app.
"""

from eks_bluegreen.stacks.delivery_stack import BlueGreenDeliveryStack

__all__ = ["BlueGreenDeliveryStack"]
