"""
infrakit: deploys splunk infrastructure servers onto vSphere or Nutanix AHV
"""
__version__ = "0.1.0"
